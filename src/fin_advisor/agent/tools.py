"""Built-in tools for the advisory agent."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fin_advisor.agent.registry import ToolPayload, ToolRegistry, ToolSpec
from fin_advisor.profile.schema import (
    completion_percentage,
    is_complete,
    missing_fields,
    summarize,
)
from fin_advisor.profile.store import ProfileStore
from fin_advisor.retrieval.service import RetrievalService


class RetrieveDocumentsInput(BaseModel):
    query: str = Field(
        min_length=1,
        description="Search query with the key terms from the user's question.",
    )
    limit: int = Field(default=5, ge=1, le=10)


class ProfileStatusInput(BaseModel):
    user_id: str = Field(min_length=1)


def register_builtin_tools(
    registry: ToolRegistry,
    retrieval: RetrievalService,
    store: ProfileStore,
) -> None:
    """Register the default tool set.

    Tools:
    - `retrieve_documents`: knowledge-base search returning context and sources.
    - `profile_status`: completion, missing items and summary of a stored profile.
    """

    def _retrieve(input_data: RetrieveDocumentsInput) -> ToolPayload:
        result = retrieval.search(input_data.query, input_data.limit)
        return {
            "context": result.context,
            "sources": [source.as_dict() for source in result.sources],
            "count": len(result.documents),
        }

    def _profile_status(input_data: ProfileStatusInput) -> ToolPayload:
        profile = store.get(input_data.user_id)
        if profile is None:
            return {"found": False, "user_id": input_data.user_id}
        return {
            "found": True,
            "user_id": input_data.user_id,
            "complete": is_complete(profile),
            "completion": completion_percentage(profile),
            "missing": missing_fields(profile),
            "summary": summarize(profile),
        }

    registry.register(
        ToolSpec(
            name="retrieve_documents",
            description=(
                "Search the financial knowledge base for financial planning, investing, "
                "retirement, tax and options-strategy topics."
            ),
            args_schema=RetrieveDocumentsInput,
            handler=_retrieve,
            tags=["retrieval", "rag"],
        )
    )
    registry.register(
        ToolSpec(
            name="profile_status",
            description="Report how complete a client's profile is and what is still missing.",
            args_schema=ProfileStatusInput,
            handler=_profile_status,
            tags=["profile"],
        )
    )
