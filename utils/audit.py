import logging
from enum import Enum
from flask import request, g

logger = logging.getLogger("helpdesk.audit")


class AuditAction(Enum):
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    SIGNUP = "SIGNUP"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    EXPORT = "EXPORT"


def _get_actor_from_request():
    actor = getattr(g, "user", None) or {}
    return actor.get("username")


def log_audit(action: AuditAction, resource_type: str = None, resource_id=None, details: dict = None):
    logger.info(
        "audit action=%s actor=%s resource=%s:%s ip=%s details=%s",
        action.value,
        _get_actor_from_request(),
        resource_type,
        resource_id,
        request.headers.get("X-Forwarded-For", request.remote_addr),
        details or {},
    )


# ---- API logging middleware helper ----
def log_api_request(path, method, status_code, latency_ms=None):
    logger.info(
        "api %s %s status=%s latency_ms=%s actor=%s",
        method,
        path,
        status_code,
        f"{latency_ms:.1f}" if latency_ms is not None else "-",
        _get_actor_from_request(),
    )
