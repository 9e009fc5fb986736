import json

import httpx
import pytest

from fin_advisor.config import AdvisorSettings, RetrievalConfig
from fin_advisor.errors import RetrievalBackendUnavailable
from fin_advisor.profile.schema import ClientProfile
from fin_advisor.retrieval.remote import VectorizeClient
from fin_advisor.retrieval.service import (
    NO_DOCUMENTS_FOUND,
    RetrievalService,
    augment_query,
    profile_query_hints,
)
from fin_advisor.types import Document, ScoredDocument

_VECTORIZE_ENV = (
    "VECTORIZE_ACCESS_TOKEN",
    "VECTORIZE_PIPELINE_ACCESS_TOKEN",
    "VECTORIZE_ORG_ID",
    "VECTORIZE_ORGANIZATION_ID",
    "VECTORIZE_PIPELINE_ID",
)

_REMOTE_PAYLOAD = {
    "documents": [
        {
            "id": "chunk-1",
            "source_display_name": "Remote Spreads Primer",
            "text": "Remote text about spreads.",
            "source": "https://example.com/remote",
            "relevancy": 0.91,
            "similarity": 0.8,
        },
        {
            "chunkId": "chunk-2",
            "sourceDisplayName": "Barely Related",
            "text": "Noise.",
            "relevancy": 0.3,
        },
    ]
}


def _client(handler) -> VectorizeClient:
    return VectorizeClient(
        access_token="token",
        org_id="org",
        pipeline_id="pipe",
        transport=httpx.MockTransport(handler),
    )


def test_remote_backend_used_when_available() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_REMOTE_PAYLOAD)

    service = RetrievalService(remote=_client(handler))
    result = service.search("credit spreads", 4)

    assert result.backend == "remote"
    assert [source.id for source in result.sources] == ["chunk-1"]
    assert result.sources[0].title == "Remote Spreads Primer"
    assert result.sources[0].url == "https://example.com/remote"
    assert result.documents[0].similarity == 0.8

    [request] = seen
    assert str(request.url) == "https://api.vectorize.io/v1/org/org/pipelines/pipe/retrieval"
    assert request.headers["Authorization"] == "Bearer token"
    assert json.loads(request.content) == {"query": "credit spreads", "numResults": 4}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json={"results": []}),
    ],
)
def test_remote_failures_fall_back_to_local_scoring(response: httpx.Response) -> None:
    service = RetrievalService(remote=_client(lambda request: response))

    result = service.search("bull put credit spread")

    assert result.backend == "local"
    assert result.sources[0].id == "opt-1"


def test_remote_timeout_falls_back_to_local_scoring() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    service = RetrievalService(remote=_client(handler))

    assert service.search("bull put credit spread").backend == "local"


def test_client_error_carries_url_and_status() -> None:
    client = _client(lambda request: httpx.Response(503))

    with pytest.raises(RetrievalBackendUnavailable) as info:
        client.retrieve("anything", 3)

    assert info.value.status_code == 503
    assert info.value.url == client.endpoint
    assert "Status Code: 503" in str(info.value)


def test_client_built_only_with_complete_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VECTORIZE_ENV:
        monkeypatch.delenv(name, raising=False)

    assert VectorizeClient.from_settings(AdvisorSettings(_env_file=None)) is None

    monkeypatch.setenv("VECTORIZE_PIPELINE_ACCESS_TOKEN", "legacy-token")
    monkeypatch.setenv("VECTORIZE_ORGANIZATION_ID", "legacy-org")
    monkeypatch.setenv("VECTORIZE_PIPELINE_ID", "pipe")
    client = VectorizeClient.from_settings(AdvisorSettings(_env_file=None))

    assert client is not None
    assert client.endpoint.endswith("/org/legacy-org/pipelines/pipe/retrieval")


def test_unrelated_query_with_high_threshold_finds_nothing() -> None:
    result = RetrievalService().search("xylophone zeppelin", threshold=0.95)

    assert result.documents == []
    assert result.sources == []
    assert result.context == NO_DOCUMENTS_FOUND


def test_context_format_and_snippets() -> None:
    long_doc = Document(doc_id="d1", title="Long Read", source_id="Big Book", text="x" * 250)
    short_doc = Document(doc_id="d2", title="Short Read", source_id="Pamphlet", text="tiny")
    scored = [
        ScoredDocument(document=long_doc, relevance=0.873, similarity=0.873),
        ScoredDocument(document=short_doc, relevance=0.7, similarity=0.7),
    ]
    service = RetrievalService([long_doc, short_doc])

    context = service.format_as_context(scored)
    sources = service.to_chat_sources(scored)

    assert context.startswith("Document 1: Long Read (Relevance: 87.3%)\nSource: Big Book\n\n")
    assert "\n\n---\n\nDocument 2: Short Read (Relevance: 70.0%)" in context
    assert sources[0].snippet == "x" * 200 + "..."
    assert sources[1].snippet == "tiny"
    assert sources[1].url == "Pamphlet"


def test_context_includes_profile_block_even_without_documents() -> None:
    context = RetrievalService().format_as_context([], profile=ClientProfile())

    assert context.startswith(NO_DOCUMENTS_FOUND)
    assert "CLIENT PROFILE:" in context
    assert context.endswith("- Completion: 0%")


def test_profile_hints_augment_query() -> None:
    profile = ClientProfile.model_validate(
        {"risk": {"tolerance": "moderate"}, "preferences": ["I like Stocks and ETFs"]}
    )

    assert profile_query_hints(profile) == [
        "[risk_tolerance: moderate]",
        "[preference: stock]",
        "[preference: etf]",
    ]
    assert augment_query("income ideas", profile) == (
        "income ideas [risk_tolerance: moderate] [preference: stock] [preference: etf]"
    )
    assert augment_query("income ideas", None) == "income ideas"


def test_retrieval_config_limits_results() -> None:
    service = RetrievalService(config=RetrievalConfig(default_limit=1, threshold=0.0))

    assert len(service.retrieve_documents("investing")) == 1


def test_non_positive_limit_returns_nothing_from_either_backend() -> None:
    remote = RetrievalService(remote=_client(lambda request: httpx.Response(200, json=_REMOTE_PAYLOAD)))

    assert remote.retrieve_documents("credit spreads", 0) == []
    assert remote.retrieve_documents("credit spreads", -1) == []
    assert RetrievalService().retrieve_documents("investing", 0) == []
