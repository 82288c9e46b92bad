import csv
import io
import time
from datetime import datetime
from typing import List, Optional

from models.chatbot_model import Message
from models.ticket_model import Ticket, TicketStatus, EscalationFile
from utils import storage

CSV_HEADER = ["ID", "Summary", "Query", "Status", "Created At"]


class TicketStateError(ValueError):
    pass


def next_ticket_id(existing: List[Ticket]) -> int:
    """Millisecond timestamp, bumped past the newest id so ids stay unique and ordered."""
    candidate = int(time.time() * 1000)
    highest = max((t.id for t in existing), default=0)
    return candidate if candidate > highest else highest + 1


def create_ticket(query: str, summary: str, history: List[Message], created_by: str,
                  escalation_message: Optional[str] = None, escalation_file: Optional[dict] = None) -> Ticket:
    tickets = storage.load_tickets()
    ticket = Ticket(
        id=next_ticket_id(tickets),
        summary=summary,
        query=query,
        status=TicketStatus.OPEN,
        created_at=datetime.now().isoformat(timespec="seconds"),
        conversation_history=list(history),
        escalation_message=escalation_message or None,
        escalation_file=EscalationFile(**escalation_file) if escalation_file else None,
        created_by=created_by,
    )
    tickets.append(ticket)
    storage.save_tickets(tickets)
    return ticket


def find_ticket(ticket_id: int, tickets: List[Ticket] = None) -> Optional[Ticket]:
    if tickets is None:
        tickets = storage.load_tickets()
    return next((t for t in tickets if t.id == ticket_id), None)


def close_ticket(ticket_id: int) -> Optional[Ticket]:
    """
    Open -> Closed. Returns None for an unknown id and raises TicketStateError
    when the ticket is already closed; a closed ticket is never reopened.
    """
    tickets = storage.load_tickets()
    ticket = find_ticket(ticket_id, tickets)
    if ticket is None:
        return None
    if ticket.status != TicketStatus.OPEN:
        raise TicketStateError(f"ticket {ticket_id} is already closed")
    ticket.status = TicketStatus.CLOSED
    storage.save_tickets(tickets)
    return ticket


def newest_first(tickets: List[Ticket]) -> List[Ticket]:
    return sorted(tickets, key=lambda t: t.id, reverse=True)


def search_tickets(tickets: List[Ticket], term: str = "") -> List[Ticket]:
    term = (term or "").strip().lower()
    if term:
        tickets = [
            t for t in tickets
            if term in str(t.id) or term in t.summary.lower() or term in t.query.lower()
        ]
    return newest_first(tickets)


def tickets_to_csv(tickets: List[Ticket]) -> str:
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    # text fields quoted, embedded quotes doubled; the numeric id stays bare
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for t in tickets:
        writer.writerow([t.id, t.summary, t.query, t.status.value, t.created_at])
    return buffer.getvalue()
