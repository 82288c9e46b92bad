from functools import wraps
from flask import session, jsonify, g
from models.user_model import UserRole
from utils import storage
from utils.security import decode_jwt

def _session_user():
    token = session.get("jwt_token")
    if not token:
        return None
    data = decode_jwt(token)
    if data is None:
        return None
    # a deleted account loses access even while its token is still valid
    if data.get("role") != UserRole.ADMIN.value:
        username = data.get("username")
        if not any(u.username == username for u in storage.load_users()):
            session.pop("jwt_token", None)
            return None
    return data

def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        data = _session_user()
        if data is None:
            return jsonify({"ok": False, "error": "login_required"}), 401
        g.user = data
        return fn(*args, **kwargs)
    return wrapper

def role_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            data = _session_user()
            if data is None:
                return jsonify({"ok": False, "error": "login_required"}), 401
            if data.get("role") not in allowed_roles:
                return jsonify({"ok": False, "error": "forbidden"}), 403
            g.user = data
            return fn(*args, **kwargs)
        return wrapper
    return decorator
