from flask import Blueprint, jsonify, g
from utils import storage
from utils.role_utils import login_required
from utils.ticket_utils import newest_first

tickets_bp = Blueprint("tickets", __name__)


def _own_tickets(username):
    return [t for t in storage.load_tickets() if t.created_by == username]


@tickets_bp.route("/mine")
@login_required
def my_tickets():
    tickets = newest_first(_own_tickets(g.user["username"]))
    return jsonify({"ok": True, "tickets": [t.list_item() for t in tickets]})


@tickets_bp.route("/mine/<int:ticket_id>")
@login_required
def my_ticket_detail(ticket_id):
    ticket = next((t for t in _own_tickets(g.user["username"]) if t.id == ticket_id), None)
    if ticket is None:
        return jsonify({"ok": False, "error": "ticket_not_found"}), 404
    return jsonify({"ok": True, "ticket": ticket.to_dict()})
