"""FastAPI entrypoint for retrieval, profile and chat-turn endpoints."""

from __future__ import annotations

from collections import deque
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError

from fin_advisor.agent.registry import ToolRegistry
from fin_advisor.agent.tools import register_builtin_tools
from fin_advisor.config import AdvisorSettings
from fin_advisor.obs.logging_config import configure_logging
from fin_advisor.profile.schema import ClientProfile, completion_percentage, missing_fields
from fin_advisor.profile.store import InMemoryProfileStore
from fin_advisor.profile.tracker import ProfileTracker
from fin_advisor.retrieval.remote import VectorizeClient
from fin_advisor.retrieval.service import RetrievalService
from fin_advisor.turn import ChatTurnProcessor
from fin_advisor.types import ToolTrace


class SearchRequest(BaseModel):
    query: str = Field(min_length=1)
    limit: int = Field(default=5, ge=1, le=20)
    threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    user_id: str | None = None


class ChatTurnRequest(BaseModel):
    message: str
    user_id: str | None = None
    profile: dict[str, Any] | None = None


_settings = AdvisorSettings()
configure_logging(_settings.log_level)

app = FastAPI(title="Financial Advisor Core", version="0.1.0")

_retrieval = RetrievalService(
    remote=VectorizeClient.from_settings(_settings),
    config=_settings.build_retrieval_config(),
)
_store = InMemoryProfileStore()
_tracker = ProfileTracker(_settings.build_profile_config())
_processor = ChatTurnProcessor(retrieval=_retrieval, store=_store, tracker=_tracker)

_tool_traces: deque[ToolTrace] = deque(maxlen=200)
_registry = ToolRegistry()
_registry.set_observer(_tool_traces.append)
register_builtin_tools(_registry, _retrieval, _store)


def _checked_profile(payload: dict[str, Any] | None) -> dict[str, Any] | None:
    """Validate a client profile but hand the raw mapping on, so `null` reads as absent."""
    if payload is None:
        return None
    try:
        ClientProfile.model_validate(payload)
    except ValidationError as exc:
        detail = exc.errors(include_url=False, include_context=False)
        raise HTTPException(status_code=422, detail=detail) from exc
    return payload


def _profile_payload(user_id: str, profile: ClientProfile) -> dict[str, Any]:
    return {
        "user_id": user_id,
        "profile": profile.model_dump(),
        "completion": completion_percentage(profile),
        "missing": missing_fields(profile),
    }


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "remote_configured": _retrieval.remote is not None,
        "documents": len(_retrieval.documents),
        "profiles": len(_store),
        "tools": _registry.names(),
    }


@app.post("/documents/search")
def document_search(request: SearchRequest) -> dict[str, Any]:
    profile = _store.get(request.user_id)
    result = _retrieval.search(
        request.query,
        request.limit,
        threshold=request.threshold,
        profile=profile,
    )
    return {
        "backend": result.backend,
        "count": len(result.documents),
        "context": result.context,
        "sources": [source.as_dict() for source in result.sources],
        "hints": result.hints,
    }


@app.get("/profiles/{user_id}")
def get_profile(user_id: str) -> dict[str, Any]:
    profile = _store.get(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"No profile stored for user: {user_id}")
    return _profile_payload(user_id, profile)


@app.put("/profiles/{user_id}")
def merge_profile(user_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    merged = _store.merge(user_id, _checked_profile(payload))
    return _profile_payload(user_id, merged)


@app.post("/chat/turn")
def chat_turn(request: ChatTurnRequest) -> dict[str, Any]:
    client_profile = _checked_profile(request.profile)
    turn = _processor.process(request.user_id, request.message, client_profile)
    return {
        "user_id": turn.user_id,
        "greeting": turn.greeting,
        "backend": turn.backend,
        "profile": turn.profile.model_dump(),
        "updates": [update.as_dict() for update in turn.updates],
        "fields_updated": turn.fields_updated,
        "completion": turn.completion,
        "missing": turn.missing,
        "summary": turn.summary,
        "context": turn.context,
        "sources": [source.as_dict() for source in turn.sources],
        "system_prompt": turn.system_prompt,
    }


@app.post("/tools/{name}")
def run_tool(name: str, payload: dict[str, Any]) -> dict[str, Any]:
    try:
        return _registry.execute(name, payload)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        detail = exc.errors(include_url=False, include_context=False)
        raise HTTPException(status_code=422, detail=detail) from exc


@app.get("/tools/traces")
def tool_traces(limit: int = 20) -> dict[str, Any]:
    records = [asdict(trace) for trace in list(_tool_traces)[-limit:]]
    return {"items": records}
