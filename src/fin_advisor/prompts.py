"""Prompt text handed to the external conversation model."""

from __future__ import annotations

from fin_advisor.profile.schema import ClientProfile, completion_percentage, summarize

GREETING_RESPONSE = (
    "Ask a question about your finances or trading and I'll retrieve relevant "
    "information and cite sources."
)

_SYSTEM_PROMPT = """
You are a financial advisory assistant.

Rules:
1) Ground every answer in the AVAILABLE DOCUMENTS below.
2) Cite the document title for every factual statement.
3) If the documents do not cover the question, say so briefly.
4) Do not give specific recommendations until the client profile is complete;
   ask one follow-up question about a missing profile item instead.

AVAILABLE DOCUMENTS:
{context}

PROFILE STATUS ({completion}% complete):
{summary}
""".strip()


def build_system_prompt(context: str, profile: ClientProfile) -> str:
    return _SYSTEM_PROMPT.format(
        context=context,
        completion=completion_percentage(profile),
        summary=summarize(profile),
    )
