# routes/auth_routes.py

from flask import Blueprint, request, jsonify, session, current_app, g
from pydantic import ValidationError
from models.user_model import User, UserRole
from utils import storage
from utils.security import hash_password, verify_password, generate_jwt, decode_jwt
from utils.role_utils import login_required
from utils.validators import password_checks, is_password_valid
from utils.audit import log_audit, AuditAction

auth_bp = Blueprint("auth", __name__)

SIGNUP_FIELDS = ("fullName", "email", "phone", "username", "password")

ADMIN_PROFILE = {
    "fullName": "Administrator",
    "email": "admin@system.io",
    "phone": "000-000-0000",
}


def _start_session(profile: dict, role: UserRole):
    payload = {"username": profile["username"], "role": role.value, "profile": profile}
    session["jwt_token"] = generate_jwt(payload)
    session.permanent = True
    g.user = payload


@auth_bp.route("/signup", methods=["POST"])
def signup():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    if not all(isinstance(data.get(k) or "", str) for k in SIGNUP_FIELDS):
        return jsonify({"ok": False, "error": "invalid_fields"}), 400
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    if not username or not password:
        return jsonify({"ok": False, "error": "missing_fields"}), 400

    users = storage.load_users()
    if username == current_app.config["ADMIN_USERNAME"] or any(u.username == username for u in users):
        return jsonify({"ok": False, "error": "Username already exists."}), 409

    if not is_password_valid(password):
        return jsonify({
            "ok": False,
            "error": "Password does not meet the requirements.",
            "checks": password_checks(password),
        }), 400

    try:
        user = User(
            full_name=(data.get("fullName") or "").strip(),
            email=data.get("email") or "",
            phone=(data.get("phone") or "").strip(),
            username=username,
            password=hash_password(password),
        )
    except ValidationError:
        return jsonify({"ok": False, "error": "invalid_fields"}), 400

    users.append(user)
    storage.save_users(users)

    _start_session(user.public(), UserRole.USER)
    log_audit(AuditAction.SIGNUP, resource_type="User", resource_id=username)
    return jsonify({"ok": True, "user": user.public(), "role": UserRole.USER.value}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    cfg = current_app.config

    # reserved admin account lives in config, not in the users document
    if username == cfg["ADMIN_USERNAME"] and password == cfg["ADMIN_PASSWORD"]:
        profile = dict(ADMIN_PROFILE, username=username)
        _start_session(profile, UserRole.ADMIN)
        log_audit(AuditAction.LOGIN, resource_type="User", resource_id=username)
        return jsonify({"ok": True, "user": profile, "role": UserRole.ADMIN.value})

    user = next((u for u in storage.load_users() if u.username == username), None)
    if not user or not verify_password(user.password, password):
        return jsonify({"ok": False, "error": "Invalid username or password."}), 401

    _start_session(user.public(), UserRole.USER)
    log_audit(AuditAction.LOGIN, resource_type="User", resource_id=username)
    return jsonify({"ok": True, "user": user.public(), "role": UserRole.USER.value})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    token = session.pop("jwt_token", None)
    g.user = decode_jwt(token) if token else None
    log_audit(AuditAction.LOGOUT)
    return jsonify({"ok": True})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({"ok": True, "user": g.user.get("profile"), "role": g.user.get("role")})


@auth_bp.route("/password-rules")
def password_rules():
    password = request.args.get("password", "")
    checks = password_checks(password)
    return jsonify({"ok": True, "checks": checks, "valid": all(checks.values())})
