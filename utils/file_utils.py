import base64
import mimetypes
from werkzeug.utils import secure_filename

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "pdf", "txt", "log", "doc", "docx"}


class AttachmentError(ValueError):
    pass


def allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def encode_upload_file(file_storage, max_bytes: int) -> dict:
    """
    Turn an uploaded file into the {name, type, data} triple stored on a ticket.
    `data` is a base64 data URL, the same shape a browser FileReader produces.
    """
    filename = secure_filename(file_storage.filename or "")
    if not filename:
        raise AttachmentError("empty_filename")
    if not allowed_file(filename):
        raise AttachmentError("extension_not_allowed")

    raw = file_storage.read(max_bytes + 1)
    if len(raw) > max_bytes:
        raise AttachmentError("file_too_large")

    mime = file_storage.mimetype or mimetypes.guess_type(filename)[0] or "application/octet-stream"
    encoded = base64.b64encode(raw).decode("ascii")
    return {"name": filename, "type": mime, "data": f"data:{mime};base64,{encoded}"}


def decode_data_url(data_url: str) -> bytes:
    _, _, payload = data_url.partition("base64,")
    return base64.b64decode(payload)
