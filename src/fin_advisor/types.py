"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Document:
    """A knowledge-base article."""

    doc_id: str
    title: str
    source_id: str
    text: str
    url: str = ""


@dataclass(slots=True)
class ScoredDocument:
    """A document with its per-query relevance.

    `similarity` mirrors `relevance` for locally scored documents; remote
    results may report them separately.
    """

    document: Document
    relevance: float
    similarity: float


@dataclass(slots=True)
class ChatSource:
    """Citation record rendered next to an answer."""

    id: str
    title: str
    url: str
    snippet: str
    relevancy: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "relevancy": self.relevancy,
        }


@dataclass(slots=True, frozen=True)
class ProfileUpdate:
    """A candidate profile change proposed by the extractor.

    `field` is a dotted path (`goals.short_term`) or a list name
    (`preferences`).
    """

    field: str
    value: str
    confidence: float

    def as_dict(self) -> dict[str, Any]:
        return {"field": self.field, "value": self.value, "confidence": self.confidence}


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
