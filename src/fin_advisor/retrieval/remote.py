"""HTTP client for the hosted Vectorize retrieval pipeline."""

from __future__ import annotations

import logging

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from fin_advisor.config import AdvisorSettings
from fin_advisor.errors import RetrievalBackendUnavailable
from fin_advisor.types import Document, ScoredDocument

logger = logging.getLogger(__name__)


class RemoteDocument(BaseModel):
    """One document as returned by the pipeline (either naming scheme)."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "chunk_id", "chunkId"))
    title: str = Field(
        default="",
        validation_alias=AliasChoices("source_display_name", "sourceDisplayName", "title"),
    )
    text: str
    url: str = Field(default="", validation_alias=AliasChoices("source", "url"))
    relevancy: float | None = None
    similarity: float | None = None

    def to_scored(self) -> ScoredDocument:
        relevance = self.relevancy if self.relevancy is not None else (self.similarity or 0.0)
        similarity = self.similarity if self.similarity is not None else relevance
        document = Document(
            doc_id=self.id,
            title=self.title or self.url or self.id,
            source_id=self.url,
            text=self.text,
            url=self.url,
        )
        return ScoredDocument(document=document, relevance=relevance, similarity=similarity)


class RetrievalResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    documents: list[RemoteDocument]


class VectorizeClient:
    """Posts a query to the retrieval pipeline and parses ranked documents.

    Any transport error, timeout, non-2xx status or unparsable body is
    raised as `RetrievalBackendUnavailable`; callers decide how to degrade.
    """

    def __init__(
        self,
        *,
        access_token: str,
        org_id: str,
        pipeline_id: str,
        base_url: str = "https://api.vectorize.io/v1",
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.org_id = org_id
        self.pipeline_id = pipeline_id
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_settings(
        cls,
        settings: AdvisorSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> VectorizeClient | None:
        """Build a client, or return None when credentials are incomplete."""
        if not settings.remote_enabled:
            return None
        return cls(
            access_token=str(settings.vectorize_access_token),
            org_id=str(settings.vectorize_org_id),
            pipeline_id=str(settings.vectorize_pipeline_id),
            base_url=settings.vectorize_base_url,
            timeout_seconds=settings.retrieval_timeout_seconds,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/org/{self.org_id}/pipelines/{self.pipeline_id}/retrieval"

    def retrieve(self, query: str, num_results: int) -> list[ScoredDocument]:
        url = self.endpoint
        try:
            with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = client.post(
                    url,
                    headers=self._headers,
                    json={"query": query, "numResults": num_results},
                )
        except httpx.TimeoutException as exc:
            raise RetrievalBackendUnavailable(
                f"Retrieval backend timed out after {self.timeout_seconds}s", url=url
            ) from exc
        except httpx.HTTPError as exc:
            raise RetrievalBackendUnavailable(
                f"Retrieval backend request failed: {exc}", url=url
            ) from exc

        if not response.is_success:
            raise RetrievalBackendUnavailable(
                "Retrieval backend returned an error status",
                url=url,
                status_code=response.status_code,
            )

        try:
            payload = RetrievalResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise RetrievalBackendUnavailable(
                f"Malformed retrieval response: {exc.error_count()} validation error(s)",
                url=url,
                status_code=response.status_code,
            ) from exc

        logger.debug("Remote backend returned %d documents", len(payload.documents))
        return [item.to_scored() for item in payload.documents]
