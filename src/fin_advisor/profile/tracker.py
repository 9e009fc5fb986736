"""Profile tracking with progress events for live UI updates."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fin_advisor.config import ProfileConfig
from fin_advisor.profile.extractor import extract_updates
from fin_advisor.profile.merge import apply_updates
from fin_advisor.profile.schema import ClientProfile
from fin_advisor.types import ProfileUpdate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProgressEvent:
    stage: str
    message: str
    progress: int
    extracted_fields: list[str] = field(default_factory=list)
    confidence: float = 0.0


@dataclass(slots=True)
class TrackingResult:
    """Outcome of processing one user message.

    `updates` holds every proposed update; `fields_updated` and
    `overall_confidence` only reflect the updates that cleared the apply
    threshold.
    """

    updated_profile: ClientProfile
    updates: list[ProfileUpdate]
    fields_updated: list[str]
    overall_confidence: float
    events: list[ProgressEvent]


ProgressCallback = Callable[[ProgressEvent], None]


class ProfileTracker:
    """Runs extract -> apply and reports each stage to subscribers."""

    def __init__(self, config: ProfileConfig | None = None) -> None:
        self.config = config or ProfileConfig()
        self._callbacks: list[ProgressCallback] = []

    def on_progress(self, callback: ProgressCallback) -> None:
        self._callbacks.append(callback)

    def clear_callbacks(self) -> None:
        self._callbacks = []

    def process_message(self, message: str, profile: ClientProfile) -> TrackingResult:
        events: list[ProgressEvent] = []
        self._emit(events, ProgressEvent("initializing", "Starting profile analysis...", 0))
        self._emit(
            events,
            ProgressEvent("extracting", "Analyzing user message for profile data...", 25),
        )

        updates = extract_updates(message, profile, self.config)
        proposed = [update.field for update in updates]
        self._emit(
            events,
            ProgressEvent(
                "processing",
                f"Found {len(updates)} profile updates",
                50,
                proposed,
                _mean_confidence(updates),
            ),
        )

        if not updates:
            self._emit(events, ProgressEvent("complete", "No profile updates found in message", 100))
            return TrackingResult(
                updated_profile=profile,
                updates=[],
                fields_updated=[],
                overall_confidence=0.0,
                events=events,
            )

        applied = [u for u in updates if u.confidence > self.config.apply_threshold]
        applied_fields = [update.field for update in applied]
        confidence = _mean_confidence(applied)
        self._emit(
            events,
            ProgressEvent("applying", "Applying profile updates...", 75, applied_fields, confidence),
        )
        updated = apply_updates(profile, updates, self.config)
        self._emit(
            events,
            ProgressEvent(
                "complete",
                f"Successfully updated {len(applied)} profile fields",
                100,
                applied_fields,
                confidence,
            ),
        )
        return TrackingResult(
            updated_profile=updated,
            updates=updates,
            fields_updated=applied_fields,
            overall_confidence=confidence,
            events=events,
        )

    def _emit(self, events: list[ProgressEvent], event: ProgressEvent) -> None:
        events.append(event)
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                logger.exception("Progress callback failed at stage %s", event.stage)


def _mean_confidence(updates: list[ProfileUpdate]) -> float:
    if not updates:
        return 0.0
    return round(sum(update.confidence for update in updates) / len(updates), 4)
