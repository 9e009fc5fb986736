"""Lexical relevance scoring over the knowledge base."""

from __future__ import annotations

import re
from collections.abc import Sequence

from fin_advisor.config import ScoringConfig
from fin_advisor.types import Document, ScoredDocument

_NON_ALNUM = re.compile(r"[\W_]+", flags=re.UNICODE)


def tokenize_query(query: str | None, min_length: int = 3) -> list[str]:
    """Lowercase, split on whitespace, strip punctuation, drop short tokens."""
    if query is None:
        return []
    if not isinstance(query, str):
        raise TypeError(f"query must be a string, got {type(query).__name__}")

    tokens: list[str] = []
    for raw in query.lower().split():
        token = _NON_ALNUM.sub("", raw)
        if len(token) >= min_length:
            tokens.append(token)
    return tokens


class RelevanceScorer:
    """Scores documents by token overlap with the query.

    Every document starts at `base_score`. Each query token found in the
    title adds `title_weight`; each token found in the body adds
    `content_weight` per occurrence, capped at `content_cap` per token; a
    token found in the source name adds `source_weight`. When more than one
    token matched, a coverage bonus proportional to the share of matched
    tokens is added. The result is clamped to `[0, max_score]` so no
    lexical match ever reports full certainty.
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    def score(self, query: str | None, documents: Sequence[Document]) -> list[ScoredDocument]:
        tokens = tokenize_query(query, self.config.min_token_length)
        results: list[ScoredDocument] = []
        for document in documents:
            value = self._score_document(tokens, document)
            results.append(ScoredDocument(document=document, relevance=value, similarity=value))
        return results

    def rank(
        self,
        query: str | None,
        documents: Sequence[Document],
        limit: int = 5,
        threshold: float | None = None,
    ) -> list[ScoredDocument]:
        """Return up to `limit` documents, best first.

        Threshold filtering runs before truncation so low scorers never
        occupy result slots. Ties keep catalog order (stable sort).
        """

        if limit <= 0:
            return []
        ranked = sorted(self.score(query, documents), key=lambda item: item.relevance, reverse=True)
        if threshold is not None:
            ranked = [item for item in ranked if item.relevance >= threshold]
        return ranked[:limit]

    def _score_document(self, tokens: list[str], document: Document) -> float:
        cfg = self.config
        title = document.title.lower()
        body = document.text.lower()
        source = document.source_id.lower()

        value = cfg.base_score
        matched_tokens = 0
        for token in tokens:
            matched = False
            if token in title:
                value += cfg.title_weight
                matched = True

            occurrences = body.count(token)
            if occurrences:
                value += min(cfg.content_weight * occurrences, cfg.content_cap)
                matched = True

            if token in source:
                value += cfg.source_weight

            if matched:
                matched_tokens += 1

        if len(tokens) > 1 and matched_tokens > 1:
            value += cfg.coverage_bonus * (matched_tokens / len(tokens))

        return round(max(0.0, min(cfg.max_score, value)), 4)
