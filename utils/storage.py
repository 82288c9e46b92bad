"""
Key-value document store.

Every piece of helpdesk state is a single JSON document under a fixed key:
the users list, the tickets list, and one message transcript per user.
Documents are read whole and overwritten whole; there are no partial updates.
"""

import json
import logging
from typing import Any, List

from database.db import db
from models.storage_model import StorageEntry
from models.user_model import User
from models.ticket_model import Ticket
from models.chatbot_model import Message, MessageAuthor

logger = logging.getLogger(__name__)

USERS_KEY = "helpdesk_users"
TICKETS_KEY = "helpdesk_tickets"
MESSAGES_KEY_PREFIX = "helpdesk_messages_"

GREETING_ID = "initial"
GREETING_TEXT = "Hello! I'm Roboto Ai. How can I assist you with your OnePlus device today?"


def load(key: str, default: Any = None) -> Any:
    entry = db.session.get(StorageEntry, key, populate_existing=True)
    if entry is None:
        return default
    try:
        return json.loads(entry.value)
    except json.JSONDecodeError:
        logger.error("Corrupt document under %s, using default", key)
        return default


def save(key: str, value: Any) -> None:
    payload = json.dumps(value)
    entry = db.session.get(StorageEntry, key, populate_existing=True)
    if entry is None:
        db.session.add(StorageEntry(key=key, value=payload))
    else:
        entry.value = payload
    db.session.commit()


def delete(key: str) -> None:
    entry = db.session.get(StorageEntry, key, populate_existing=True)
    if entry is not None:
        db.session.delete(entry)
        db.session.commit()


# ---- typed helpers ----
def load_users() -> List[User]:
    return [User.model_validate(u) for u in load(USERS_KEY, [])]


def save_users(users: List[User]) -> None:
    save(USERS_KEY, [u.model_dump(by_alias=True) for u in users])


def load_tickets() -> List[Ticket]:
    return [Ticket.model_validate(t) for t in load(TICKETS_KEY, [])]


def save_tickets(tickets: List[Ticket]) -> None:
    save(TICKETS_KEY, [t.to_dict() for t in tickets])


def messages_key(username: str) -> str:
    return f"{MESSAGES_KEY_PREFIX}{username}"


def greeting_message() -> Message:
    return Message(id=GREETING_ID, author=MessageAuthor.BOT, text=GREETING_TEXT)


def load_messages(username: str) -> List[Message]:
    """Transcript for `username`; a fresh transcript starts with the greeting."""
    raw = load(messages_key(username))
    if not raw:
        return [greeting_message()]
    return [Message.model_validate(m) for m in raw]


def save_messages(username: str, messages: List[Message]) -> None:
    save(messages_key(username), [m.to_dict() for m in messages])
