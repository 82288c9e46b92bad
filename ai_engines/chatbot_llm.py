# ai_engines/chatbot_llm.py
"""
Chatbot engine:
- Retrieves knowledge base context for the user's question (keyword match)
- Builds a prompt with that context and the conversation so far
- Calls the LLM (OpenAI chat completions) once, with no retry
"""

import logging
from typing import List, Optional

from flask import current_app
from openai import OpenAI

from ai_engines.knowledge_base import find_relevant_kb
from models.chatbot_model import Message, MessageAuthor

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = (
    "I'm sorry, I'm having trouble connecting to my brain right now. "
    "Please try again later."
)


class LLMUnavailableError(RuntimeError):
    pass


def format_history(history: List[Message]) -> str:
    return "\n".join(
        f"{'User' if m.author == MessageAuthor.USER else 'Bot'}: {m.text}"
        for m in history
    )


def build_chat_prompt(query: str, history: List[Message]) -> str:
    context = find_relevant_kb(query)
    history_text = format_history(history)

    return f"""
You are an AI Helpdesk Bot for OnePlus products. Your goal is to answer user questions based ONLY on the provided knowledge base context.
If the answer is not in the context, clearly state that you don't have enough information and suggest escalating to a human agent.
Be helpful, polite, and concise. Do not use any information you know outside of the provided context.
After providing a helpful answer, ask if there is anything else you can help with.

KNOWLEDGE BASE CONTEXT:
---
{context}
---

CONVERSATION HISTORY:
---
{history_text}
---

CURRENT USER QUESTION: "{query}"

Based on all the above, provide your response:
"""


# -------- LLM call ----------
def call_llm(prompt: str, system_instruction: Optional[str] = None, temperature: Optional[float] = None) -> str:
    cfg = current_app.config
    api_key = cfg.get("OPENAI_API_KEY")
    if not api_key:
        raise LLMUnavailableError("OPENAI_API_KEY not configured")

    messages = []
    if system_instruction:
        messages.append({"role": "system", "content": system_instruction})
    messages.append({"role": "user", "content": prompt})

    client = OpenAI(api_key=api_key)
    resp = client.chat.completions.create(
        model=cfg["OPENAI_MODEL"],
        messages=messages,
        temperature=cfg["LLM_TEMPERATURE"] if temperature is None else temperature,
    )
    return (resp.choices[0].message.content or "").strip()


def generate_answer(query: str, history: List[Message]) -> str:
    """
    Bot reply for `query`. Never raises: any failure becomes FALLBACK_ANSWER.
    """
    prompt = build_chat_prompt(query, history)
    try:
        return call_llm(prompt)
    except Exception:
        logger.exception("LLM call failed, returning fallback answer")
        return FALLBACK_ANSWER
