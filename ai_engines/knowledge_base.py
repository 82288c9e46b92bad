# ai_engines/knowledge_base.py
"""
Static knowledge base bundled with the helpdesk, plus the keyword retrieval
step that picks which articles ground a bot answer.
"""

from typing import List

from models.kb_model import KBArticle

KNOWLEDGE_BASE: List[KBArticle] = [
    KBArticle(
        id="KB101",
        title="OnePlus 11 Green Line Display Issue",
        content="""Title: OnePlus 11 Green Line Display Issue
Affected Models: OnePlus 11, OnePlus 10 Pro (some units)
Description: Some users have reported a persistent green line appearing on the display of their OnePlus phones after a software update or prolonged use. This is often a hardware-related issue.
Solution:
1. Try a software update to the latest version.
2. If the issue persists, visit an authorized OnePlus service center.
3. If your device is under warranty, this issue is typically covered for free repair or replacement.
4. For out-of-warranty devices, OnePlus may offer a one-time free screen replacement or a discounted repair depending on the device age and specific region policy.
Contact support: If unsure, contact OnePlus support directly via their website or customer service hotline.""",
    ),
    KBArticle(
        id="KB102",
        title="OnePlus India Warranty Policy Overview",
        content="""Title: OnePlus India Warranty Policy Overview
Duration: All new OnePlus devices purchased in India come with a standard 12-month manufacturer's warranty from the date of purchase. Accessories may have a shorter warranty period.
Coverage: The warranty covers manufacturing defects in materials and workmanship under normal use.
Exclusions:
- Accidental damage (drops, liquid damage)
- Unauthorized repairs or modifications
- Normal wear and tear
- Software issues not caused by manufacturing defects
Proof of Purchase: A valid proof of purchase (e.g., invoice, receipt) is required for all warranty claims.
Claim Process: To initiate a warranty claim, visit a OnePlus authorized service center or contact customer support for guidance.""",
    ),
]

NO_ARTICLES_FOUND = (
    "No specific knowledge base articles found. "
    "Try to answer generally or suggest escalation."
)

# keyword -> article id, consulted only when the plain substring scan finds nothing
_FALLBACK_KEYWORDS = [
    (("warranty",), "KB102"),
    (("green line", "display"), "KB101"),
]


def get_article(article_id: str):
    return next((a for a in KNOWLEDGE_BASE if a.id == article_id), None)


def match_articles(query: str) -> List[KBArticle]:
    q = query.lower()
    matches = [
        a for a in KNOWLEDGE_BASE
        if q in a.title.lower() or q in a.content.lower()
    ]
    if matches:
        return matches

    for keywords, article_id in _FALLBACK_KEYWORDS:
        if any(k in q for k in keywords):
            return [get_article(article_id)]
    return []


def find_relevant_kb(query: str) -> str:
    """Context block for the prompt: matching articles, or a note that none matched."""
    articles = match_articles(query)
    if not articles:
        return NO_ARTICLES_FOUND
    return "\n\n---\n\n".join(f"Article ID: {a.id}\n{a.content}" for a in articles)
