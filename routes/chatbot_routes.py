import threading

from flask import Blueprint, request, jsonify, current_app, g
from ai_engines.chatbot_llm import generate_answer
from ai_engines.summarizer import summarize_conversation, SummaryError, SUMMARY_FALLBACK
from models.chatbot_model import Message, MessageAuthor, Feedback
from utils import storage
from utils.file_utils import encode_upload_file, AttachmentError
from utils.role_utils import login_required
from utils.ticket_utils import create_ticket

chatbot_bp = Blueprint("chatbot", __name__)

# usernames with a chat or escalation request currently being served
_in_flight = set()
_in_flight_lock = threading.Lock()


def _try_begin(username: str) -> bool:
    with _in_flight_lock:
        if username in _in_flight:
            return False
        _in_flight.add(username)
        return True


def _finish(username: str):
    with _in_flight_lock:
        _in_flight.discard(username)


def _json_body():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _busy():
    return jsonify({"ok": False, "error": "request_in_progress"}), 409


@chatbot_bp.route("/chat/history")
@login_required
def chat_history():
    messages = storage.load_messages(g.user["username"])
    return jsonify({"ok": True, "messages": [m.to_dict() for m in messages]})


@chatbot_bp.route("/chat/query", methods=["POST"])
@login_required
def chat_query():
    payload = _json_body()
    text = payload.get("message") or ""
    if not isinstance(text, str):
        return jsonify({"ok": False, "error": "invalid_message"}), 400
    if not text.strip():
        return jsonify({"ok": False, "error": "empty_message"}), 400

    username = g.user["username"]
    if not _try_begin(username):
        return _busy()
    try:
        user_msg = Message(author=MessageAuthor.USER, text=text)
        answer = generate_answer(text, storage.load_messages(username) + [user_msg])
        bot_msg = Message(author=MessageAuthor.BOT, text=answer)

        # reload: feedback may have been written while the LLM call was out
        messages = storage.load_messages(username)
        messages.extend([user_msg, bot_msg])
        storage.save_messages(username, messages)
    finally:
        _finish(username)

    return jsonify({
        "ok": True,
        "userMessage": user_msg.to_dict(),
        "botMessage": bot_msg.to_dict(),
        "canEscalate": True,
    })


@chatbot_bp.route("/chat/feedback/<message_id>", methods=["POST"])
@login_required
def chat_feedback(message_id):
    payload = _json_body()
    try:
        feedback = Feedback(payload.get("feedback"))
    except ValueError:
        return jsonify({"ok": False, "error": "invalid_feedback"}), 400

    username = g.user["username"]
    messages = storage.load_messages(username)
    msg = next((m for m in messages if m.id == message_id), None)
    if msg is None:
        return jsonify({"ok": False, "error": "message_not_found"}), 404

    # same value twice clears it
    msg.feedback = None if msg.feedback == feedback else feedback
    storage.save_messages(username, messages)
    return jsonify({"ok": True, "message": msg.to_dict()})


@chatbot_bp.route("/chat/escalate", methods=["POST"])
@login_required
def chat_escalate():
    if request.mimetype == "multipart/form-data":
        escalation_message = request.form.get("message", "")
    else:
        escalation_message = _json_body().get("message", "")
    if escalation_message is not None and not isinstance(escalation_message, str):
        return jsonify({"ok": False, "error": "invalid_message"}), 400
    upload = request.files.get("file")

    username = g.user["username"]
    if not _try_begin(username):
        return _busy()
    try:
        messages = storage.load_messages(username)
        last_user = next((m for m in reversed(messages) if m.author == MessageAuthor.USER), None)
        if last_user is None:
            return jsonify({"ok": False, "error": "no_user_message"}), 400

        file_data = None
        if upload is not None and upload.filename:
            try:
                file_data = encode_upload_file(upload, current_app.config["MAX_ATTACHMENT_BYTES"])
            except AttachmentError as e:
                return jsonify({"ok": False, "error": str(e)}), 400

        try:
            summary = summarize_conversation(messages)
        except SummaryError:
            summary = SUMMARY_FALLBACK

        messages = storage.load_messages(username)
        ticket = create_ticket(
            query=last_user.text,
            summary=summary,
            history=messages,
            created_by=username,
            escalation_message=escalation_message,
            escalation_file=file_data,
        )
        current_app.logger.info("Ticket %s created by %s", ticket.id, username)

        system_msg = Message(
            author=MessageAuthor.SYSTEM,
            text=f"Ticket #{ticket.id} created. An agent will review it shortly.",
        )
        messages.append(system_msg)
        storage.save_messages(username, messages)
    finally:
        _finish(username)

    return jsonify({"ok": True, "ticket": ticket.to_dict(), "systemMessage": system_msg.to_dict()}), 201
