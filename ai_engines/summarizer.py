"""
Ticket summarizer: condenses an escalated conversation into a short ticket title.
"""

import logging
from typing import List

from ai_engines.chatbot_llm import call_llm, format_history
from models.chatbot_model import Message

logger = logging.getLogger(__name__)

EMPTY_HISTORY_SUMMARY = "No conversation history."
SUMMARY_FALLBACK = "Could not generate AI summary."


class SummaryError(RuntimeError):
    pass


def summarize_conversation(history: List[Message]) -> str:
    if not history:
        return EMPTY_HISTORY_SUMMARY

    prompt = f"""
Summarize the following user support conversation into a concise ticket title/summary (max 15 words).
Focus on the core problem the user is facing.

CONVERSATION:
---
{format_history(history)}
---

TICKET SUMMARY:
"""
    try:
        return call_llm(prompt, temperature=0.0)
    except Exception as e:
        logger.exception("Ticket summarization failed")
        raise SummaryError("Failed to summarize ticket.") from e
