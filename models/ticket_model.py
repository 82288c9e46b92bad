from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.chatbot_model import Message

class TicketStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"

class EscalationFile(BaseModel):
    name: str
    type: str
    data: str  # base64 data URL

class Ticket(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    summary: str
    query: str
    status: TicketStatus = TicketStatus.OPEN
    created_at: str
    conversation_history: List[Message] = Field(default_factory=list)
    escalation_message: Optional[str] = None
    escalation_file: Optional[EscalationFile] = None
    created_by: Optional[str] = None

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    def list_item(self) -> dict:
        """Row shape for ticket lists (no transcript, no file payload)."""
        return {
            "id": self.id,
            "summary": self.summary,
            "query": self.query,
            "status": self.status.value,
            "createdAt": self.created_at,
            "createdBy": self.created_by,
            "hasAttachment": self.escalation_file is not None,
        }
