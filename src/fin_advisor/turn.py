"""One chat turn: profile tracking followed by profile-aware retrieval."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from fin_advisor.profile.schema import (
    ClientProfile,
    completion_percentage,
    missing_fields,
    summarize,
)
from fin_advisor.profile.store import ProfileStore
from fin_advisor.profile.tracker import ProfileTracker
from fin_advisor.prompts import GREETING_RESPONSE, build_system_prompt
from fin_advisor.retrieval.service import RetrievalService
from fin_advisor.types import ChatSource, ProfileUpdate

logger = logging.getLogger(__name__)

_GREETING = re.compile(r"^(hi|hello|hey|howdy|yo|sup|start|help)\b[!.,\s]*$", re.IGNORECASE)


def is_greeting(message: str) -> bool:
    return _GREETING.match(message.strip()) is not None


@dataclass(slots=True)
class TurnContext:
    """Everything the conversation model needs for one reply."""

    user_id: str | None
    profile: ClientProfile
    updates: list[ProfileUpdate]
    fields_updated: list[str]
    completion: int
    missing: list[str]
    summary: str
    context: str
    sources: list[ChatSource] = field(default_factory=list)
    system_prompt: str = ""
    greeting: bool = False
    backend: str = "local"


class ChatTurnProcessor:
    """Reconciles, updates and persists the profile, then retrieves context.

    The client-submitted profile is merged over the stored one first, so
    state the browser holds is never lost, then the latest utterance is
    run through the tracker and the result persisted before retrieval.
    """

    def __init__(
        self,
        *,
        retrieval: RetrievalService,
        store: ProfileStore,
        tracker: ProfileTracker | None = None,
    ) -> None:
        self.retrieval = retrieval
        self.store = store
        self.tracker = tracker or ProfileTracker()

    def process(
        self,
        user_id: str | None,
        message: str,
        client_profile: ClientProfile | Mapping[str, Any] | None = None,
    ) -> TurnContext:
        if not isinstance(message, str):
            raise TypeError(f"message must be a string, got {type(message).__name__}")

        current = self.store.merge(user_id, client_profile)

        if is_greeting(message):
            return self._build(user_id, current, [], [], GREETING_RESPONSE, [], greeting=True)

        tracked = self.tracker.process_message(message, current)
        profile = tracked.updated_profile
        if tracked.fields_updated:
            self.store.set(user_id, profile)
            logger.info("Updated profile fields %s for user %s", tracked.fields_updated, user_id)

        result = self.retrieval.search(message, profile=profile)
        return self._build(
            user_id,
            profile,
            tracked.updates,
            tracked.fields_updated,
            result.context,
            result.sources,
            backend=result.backend,
        )

    def _build(
        self,
        user_id: str | None,
        profile: ClientProfile,
        updates: list[ProfileUpdate],
        fields_updated: list[str],
        context: str,
        sources: list[ChatSource],
        *,
        greeting: bool = False,
        backend: str = "local",
    ) -> TurnContext:
        return TurnContext(
            user_id=user_id,
            profile=profile,
            updates=updates,
            fields_updated=fields_updated,
            completion=completion_percentage(profile),
            missing=missing_fields(profile),
            summary=summarize(profile),
            context=context,
            sources=sources,
            system_prompt=build_system_prompt(context, profile),
            greeting=greeting,
            backend=backend,
        )
