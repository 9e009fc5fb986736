"""Retrieval orchestration: remote pipeline first, local scoring as fallback."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from time import perf_counter

from fin_advisor.config import RetrievalConfig
from fin_advisor.errors import RetrievalBackendUnavailable
from fin_advisor.profile.schema import ClientProfile, format_profile_block
from fin_advisor.retrieval.catalog import load_catalog
from fin_advisor.retrieval.remote import VectorizeClient
from fin_advisor.retrieval.scorer import RelevanceScorer
from fin_advisor.types import ChatSource, Document, ScoredDocument

logger = logging.getLogger(__name__)

NO_DOCUMENTS_FOUND = "No relevant documents found."

# Asset classes surfaced from stated preferences as ranking hints.
_PREFERENCE_TERMS: tuple[str, ...] = (
    "stock",
    "bond",
    "etf",
    "fund",
    "crypto",
    "real estate",
    "option",
)


@dataclass(slots=True)
class RetrievalResult:
    """Documents plus the two renderings handed downstream."""

    documents: list[ScoredDocument]
    context: str
    sources: list[ChatSource]
    backend: str
    latency_ms: float = 0.0
    query: str = ""
    hints: list[str] = field(default_factory=list)


def profile_query_hints(profile: ClientProfile | None) -> list[str]:
    """Bracketed `key: value` hints derived from the profile.

    The value is separated from the key so it is scored as its own token.
    """

    if profile is None:
        return []
    hints: list[str] = []
    if profile.risk.tolerance:
        hints.append(f"[risk_tolerance: {profile.risk.tolerance}]")
    stated = " ".join(profile.preferences).lower()
    for term in _PREFERENCE_TERMS:
        if term in stated:
            hints.append(f"[preference: {term}]")
    return hints


def augment_query(query: str, profile: ClientProfile | None) -> str:
    hints = profile_query_hints(profile)
    if not hints:
        return query
    return f"{query} {' '.join(hints)}".strip()


class RetrievalService:
    """Single entry point for knowledge-base retrieval.

    When a remote client is configured it is tried first; any
    `RetrievalBackendUnavailable` is logged and answered from the local
    scorer instead. Retrieval never raises for degraded conditions: an
    empty list is a valid answer.
    """

    def __init__(
        self,
        documents: Sequence[Document] | None = None,
        *,
        scorer: RelevanceScorer | None = None,
        remote: VectorizeClient | None = None,
        config: RetrievalConfig | None = None,
    ) -> None:
        self.documents: tuple[Document, ...] = (
            tuple(documents) if documents is not None else load_catalog()
        )
        self.scorer = scorer or RelevanceScorer()
        self.remote = remote
        self.config = config or RetrievalConfig()

    def retrieve_documents(
        self,
        query: str | None,
        limit: int | None = None,
        *,
        threshold: float | None = None,
        profile: ClientProfile | None = None,
    ) -> list[ScoredDocument]:
        documents, _ = self._retrieve(query, limit, threshold, profile)
        return documents

    def search(
        self,
        query: str | None,
        limit: int | None = None,
        *,
        threshold: float | None = None,
        profile: ClientProfile | None = None,
    ) -> RetrievalResult:
        """Retrieve and render context plus citation sources in one call."""

        start = perf_counter()
        documents, backend = self._retrieve(query, limit, threshold, profile)
        return RetrievalResult(
            documents=documents,
            context=self.format_as_context(documents, profile=profile),
            sources=self.to_chat_sources(documents),
            backend=backend,
            latency_ms=(perf_counter() - start) * 1000.0,
            query=query or "",
            hints=profile_query_hints(profile),
        )

    def format_as_context(
        self,
        documents: Sequence[ScoredDocument],
        *,
        profile: ClientProfile | None = None,
    ) -> str:
        if not documents:
            context = NO_DOCUMENTS_FOUND
        else:
            blocks = []
            for index, item in enumerate(documents, start=1):
                doc = item.document
                title = doc.title or f"Document {index}"
                source = doc.source_id or doc.url or "Unknown source"
                blocks.append(
                    f"Document {index}: {title} (Relevance: {item.relevance * 100:.1f}%)\n"
                    f"Source: {source}\n\n"
                    f"{doc.text}"
                )
            context = "\n\n---\n\n".join(blocks)

        if profile is not None:
            context = f"{context}\n\n{format_profile_block(profile)}"
        return context

    def to_chat_sources(self, documents: Sequence[ScoredDocument]) -> list[ChatSource]:
        limit = self.config.snippet_length
        sources: list[ChatSource] = []
        for item in documents:
            doc = item.document
            snippet = doc.text if len(doc.text) <= limit else doc.text[:limit] + "..."
            sources.append(
                ChatSource(
                    id=doc.doc_id,
                    title=doc.title or doc.source_id,
                    url=doc.url or doc.source_id,
                    snippet=snippet,
                    relevancy=item.relevance,
                )
            )
        return sources

    def _retrieve(
        self,
        query: str | None,
        limit: int | None,
        threshold: float | None,
        profile: ClientProfile | None,
    ) -> tuple[list[ScoredDocument], str]:
        if query is None:
            query = ""
        if not isinstance(query, str):
            raise TypeError(f"query must be a string, got {type(query).__name__}")
        limit = self.config.default_limit if limit is None else limit
        threshold = self.config.threshold if threshold is None else threshold
        effective_query = augment_query(query, profile)

        logger.info(
            "Retrieving documents for %r (limit=%d, threshold=%.2f)",
            effective_query,
            limit,
            threshold,
        )

        if self.remote is not None:
            try:
                remote_docs = self.remote.retrieve(effective_query, limit)
            except RetrievalBackendUnavailable as exc:
                logger.warning("Remote retrieval unavailable, using local scorer: %s", exc)
            else:
                ranked = sorted(remote_docs, key=lambda item: item.relevance, reverse=True)
                relevant = [item for item in ranked if item.relevance >= threshold]
                results = relevant[: max(limit, 0)]
                logger.info("Remote backend returned %d relevant documents", len(results))
                return results, "remote"

        results = self.scorer.rank(effective_query, self.documents, limit=limit, threshold=threshold)
        logger.info("Local scorer returned %d relevant documents", len(results))
        return results, "local"
