# models/chatbot_model.py
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class MessageAuthor(str, Enum):
    USER = "user"
    BOT = "bot"
    SYSTEM = "system"

class Feedback(str, Enum):
    UP = "up"
    DOWN = "down"

def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

class Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    author: MessageAuthor
    text: str
    timestamp: str = Field(default_factory=_now_iso)
    feedback: Optional[Feedback] = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
