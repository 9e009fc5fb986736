"""Per-user profile storage."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol

from fin_advisor.profile.merge import deep_merge
from fin_advisor.profile.schema import ClientProfile

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Key-value contract for profiles keyed by an opaque user id."""

    def get(self, user_id: str | None) -> ClientProfile | None:
        """Return the stored profile, or None."""

    def set(self, user_id: str | None, profile: ClientProfile) -> None:
        """Store a profile, replacing any previous one."""

    def merge(
        self,
        user_id: str | None,
        incoming: ClientProfile | Mapping[str, Any] | None,
    ) -> ClientProfile:
        """Deep-merge `incoming` over the stored (or empty) profile and persist it."""


@dataclass(slots=True)
class ProfileRecord:
    profile: ClientProfile
    updated_at: datetime


class InMemoryProfileStore:
    """Process-local store used for tests and single-node deployments.

    Writes for the same user are serialised with a per-user lock so a
    merge's read-modify-write cannot interleave with another write.
    Missing or empty user ids are never persisted.
    """

    def __init__(self) -> None:
        self._records: dict[str, ProfileRecord] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def get(self, user_id: str | None) -> ClientProfile | None:
        if not user_id:
            return None
        record = self._records.get(user_id)
        return record.profile.model_copy(deep=True) if record else None

    def record(self, user_id: str) -> ProfileRecord | None:
        return self._records.get(user_id)

    def set(self, user_id: str | None, profile: ClientProfile) -> None:
        if not user_id:
            return
        with self._lock_for(user_id):
            self._write(user_id, profile)

    def merge(
        self,
        user_id: str | None,
        incoming: ClientProfile | Mapping[str, Any] | None,
    ) -> ClientProfile:
        if not user_id:
            return deep_merge(ClientProfile(), incoming)
        with self._lock_for(user_id):
            record = self._records.get(user_id)
            base = record.profile if record else ClientProfile()
            merged = deep_merge(base, incoming)
            self._write(user_id, merged)
        return merged.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._records)

    def _write(self, user_id: str, profile: ClientProfile) -> None:
        self._records[user_id] = ProfileRecord(
            profile=profile.model_copy(deep=True),
            updated_at=datetime.now(timezone.utc),
        )
        logger.debug("Stored profile for user %s", user_id)

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock
