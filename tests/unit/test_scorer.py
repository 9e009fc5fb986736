import pytest

from fin_advisor.config import ScoringConfig
from fin_advisor.retrieval.catalog import load_catalog
from fin_advisor.retrieval.scorer import RelevanceScorer, tokenize_query
from fin_advisor.types import Document


def _doc(doc_id: str, title: str, text: str, source: str = "Guide") -> Document:
    return Document(doc_id=doc_id, title=title, source_id=source, text=text)


def test_tokenize_strips_punctuation_and_short_tokens() -> None:
    assert tokenize_query("Hello, World! a an IRA?") == ["hello", "world", "ira"]
    assert tokenize_query("") == []
    assert tokenize_query(None) == []


def test_tokenize_rejects_non_string() -> None:
    with pytest.raises(TypeError):
        tokenize_query(42)  # type: ignore[arg-type]


def test_unrelated_query_scores_base() -> None:
    [scored] = RelevanceScorer().score("xylophone", [_doc("d", "Bonds", "bond ladders")])

    assert scored.relevance == 0.5
    assert scored.similarity == scored.relevance


def test_title_and_body_weights() -> None:
    scorer = RelevanceScorer()
    docs = [
        _doc("title", "Bonds", "bond"),
        _doc("body", "Notes", "yields and more yields"),
        _doc("source", "Notes", "nothing here", source="Tax Guide"),
    ]

    title = scorer.score("bonds", docs)[0]
    body = scorer.score("yields", docs)[1]
    source = scorer.score("tax", docs)[2]

    assert title.relevance == 0.7
    assert body.relevance == 0.8
    # Source matches add weight but do not count toward coverage.
    assert source.relevance == 0.6


def test_body_weight_is_capped_per_token() -> None:
    config = ScoringConfig(max_score=1.0)
    [scored] = RelevanceScorer(config).score("tax", [_doc("d", "Notes", "tax " * 10)])

    assert scored.relevance == 0.8


def test_coverage_bonus_only_when_several_tokens_match() -> None:
    scorer = RelevanceScorer()
    doc = _doc("d", "Bonds", "yields")

    [both] = scorer.score("bonds yields", [doc])
    [one] = scorer.score("bonds xylophone", [doc])

    assert both.relevance == 0.95
    assert one.relevance == 0.7


def test_scores_are_clamped_below_certainty() -> None:
    [scored] = RelevanceScorer().score("tax", [_doc("d", "Tax planning", "tax tax tax tax")])

    assert scored.relevance == 0.99


def test_rank_filters_before_limit_and_keeps_ties_stable() -> None:
    scorer = RelevanceScorer()
    docs = [
        _doc("a", "Other", "nothing"),
        _doc("b", "Bonds", "x"),
        _doc("c", "Bonds", "x"),
        _doc("d", "Bonds", "x"),
    ]

    ranked = scorer.rank("bonds", docs, limit=2, threshold=0.65)

    assert [item.document.doc_id for item in ranked] == ["b", "c"]
    assert scorer.rank("bonds", docs, limit=10, threshold=0.65)[-1].document.doc_id == "d"
    assert scorer.rank("bonds", docs, limit=0) == []


def test_options_strategy_query_ranks_credit_spread_article_first() -> None:
    ranked = RelevanceScorer().rank("bull put credit spread", load_catalog(), limit=5, threshold=0.65)

    assert ranked[0].document.doc_id == "opt-1"
    assert ranked[0].relevance > 0.8


def test_more_matching_text_never_lowers_score() -> None:
    scorer = RelevanceScorer()
    query = "dividend growth stocks"
    before = _doc("d", "Income", "dividend payers")
    after = _doc("d", "Income", "dividend payers with dividend growth and more dividend stocks")

    [low] = scorer.score(query, [before])
    [high] = scorer.score(query, [after])

    assert high.relevance >= low.relevance
    assert 0.0 <= high.relevance <= 0.99
