from flask import Blueprint, request, jsonify, send_file, current_app
from models.ticket_model import TicketStatus
from models.user_model import UserRole
from utils import storage
from utils.audit import log_audit, AuditAction
from utils.file_utils import decode_data_url
from utils.role_utils import role_required
from utils.ticket_utils import (
    find_ticket, close_ticket, search_tickets, tickets_to_csv, TicketStateError,
)
import io

admin_bp = Blueprint("admin", __name__)

ADMIN = UserRole.ADMIN.value


# Simple Admin Dashboard
@admin_bp.route("/")
@role_required(ADMIN)
def admin_index():
    tickets = storage.load_tickets()
    open_count = sum(1 for t in tickets if t.status == TicketStatus.OPEN)
    return jsonify({
        "ok": True,
        "tickets_total": len(tickets),
        "tickets_open": open_count,
        "tickets_closed": len(tickets) - open_count,
        "users": len(storage.load_users()),
    })


@admin_bp.route("/tickets")
@role_required(ADMIN)
def admin_tickets():
    tickets = search_tickets(storage.load_tickets(), request.args.get("q", ""))
    return jsonify({"ok": True, "tickets": [t.list_item() for t in tickets]})


@admin_bp.route("/tickets/<int:ticket_id>")
@role_required(ADMIN)
def admin_ticket_detail(ticket_id):
    ticket = find_ticket(ticket_id)
    if ticket is None:
        return jsonify({"ok": False, "error": "ticket_not_found"}), 404
    return jsonify({"ok": True, "ticket": ticket.to_dict()})


@admin_bp.route("/tickets/<int:ticket_id>/attachment")
@role_required(ADMIN)
def admin_ticket_attachment(ticket_id):
    ticket = find_ticket(ticket_id)
    if ticket is None or ticket.escalation_file is None:
        return jsonify({"ok": False, "error": "attachment_not_found"}), 404
    f = ticket.escalation_file
    return send_file(io.BytesIO(decode_data_url(f.data)), mimetype=f.type, as_attachment=True, download_name=f.name)


@admin_bp.route("/tickets/<int:ticket_id>/close", methods=["POST"])
@role_required(ADMIN)
def admin_close_ticket(ticket_id):
    try:
        ticket = close_ticket(ticket_id)
    except TicketStateError:
        return jsonify({"ok": False, "error": "ticket_already_closed"}), 409
    if ticket is None:
        return jsonify({"ok": False, "error": "ticket_not_found"}), 404
    log_audit(AuditAction.UPDATE, resource_type="Ticket", resource_id=ticket_id, details={"status": ticket.status.value})
    return jsonify({"ok": True, "ticket": ticket.list_item()})


# Export tickets CSV
@admin_bp.route("/tickets/export")
@role_required(ADMIN)
def export_tickets():
    tickets = storage.load_tickets()
    content = tickets_to_csv(tickets)
    log_audit(AuditAction.EXPORT, resource_type="Ticket", details={"rows": len(tickets)})
    return send_file(io.BytesIO(content.encode("utf-8")), mimetype="text/csv", as_attachment=True, download_name="tickets.csv")


@admin_bp.route("/users")
@role_required(ADMIN)
def admin_users():
    return jsonify({"ok": True, "users": [u.public() for u in storage.load_users()]})


@admin_bp.route("/users/<username>", methods=["DELETE"])
@role_required(ADMIN)
def admin_delete_user(username):
    if username == current_app.config["ADMIN_USERNAME"]:
        return jsonify({"ok": False, "error": "cannot_delete_admin"}), 403
    users = storage.load_users()
    remaining = [u for u in users if u.username != username]
    if len(remaining) == len(users):
        return jsonify({"ok": False, "error": "user_not_found"}), 404
    storage.save_users(remaining)
    log_audit(AuditAction.DELETE, resource_type="User", resource_id=username)
    return ("", 204)
