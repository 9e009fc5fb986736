"""Applying extractor output and reconciling client/server profiles."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fin_advisor.config import ProfileConfig
from fin_advisor.profile.schema import ClientProfile
from fin_advisor.types import ProfileUpdate

logger = logging.getLogger(__name__)

_SECTIONS = ("goals", "risk", "financials")
_LIST_FIELDS = ("preferences", "expectations")


def apply_updates(
    profile: ClientProfile,
    updates: Iterable[ProfileUpdate],
    config: ProfileConfig | None = None,
) -> ClientProfile:
    """Return a new profile with qualifying updates applied.

    Updates at or below `apply_threshold` are dropped, as are blank values,
    so an applied update never clears a set field. Dotted paths assign
    the nested scalar; list fields append when the value is not already
    present. Unknown paths are ignored. The input profile is not mutated.
    """

    if not isinstance(profile, ClientProfile):
        raise TypeError(f"expected ClientProfile, got {type(profile).__name__}")
    threshold = (config or ProfileConfig()).apply_threshold
    data = profile.model_dump()

    for update in updates:
        if update.confidence <= threshold:
            logger.debug(
                "Dropping low-confidence update %s (%.2f <= %.2f)",
                update.field,
                update.confidence,
                threshold,
            )
            continue
        if not isinstance(update.value, str) or not update.value.strip():
            logger.debug("Dropping malformed update %s with a blank value", update.field)
            continue
        if not _assign(data, update):
            logger.debug("Ignoring update for unknown field %r", update.field)

    return ClientProfile.model_validate(data)


def _assign(data: dict[str, Any], update: ProfileUpdate) -> bool:
    parts = update.field.split(".")
    if len(parts) == 2:
        section, name = parts
        if section in _SECTIONS and name in data[section]:
            data[section][name] = update.value
            return True
        return False

    if len(parts) == 1:
        name = parts[0]
        if name == "time_horizon":
            data[name] = update.value
            return True
        if name in _LIST_FIELDS:
            if update.value not in data[name]:
                data[name].append(update.value)
            return True
    return False


def deep_merge(
    base: ClientProfile,
    incoming: ClientProfile | Mapping[str, Any] | None,
) -> ClientProfile:
    """Overlay `incoming` on `base`.

    Lists replace wholesale, mappings recurse, scalars overwrite, and
    None or blank-string values never clobber existing data. Merging the same input twice
    gives the same result as merging it once.
    """

    result = base.model_dump()
    if incoming is None:
        return ClientProfile.model_validate(result)
    if isinstance(incoming, ClientProfile):
        source: Mapping[str, Any] = incoming.model_dump()
    elif isinstance(incoming, Mapping):
        source = incoming
    else:
        raise TypeError(f"cannot merge {type(incoming).__name__} into a profile")
    return ClientProfile.model_validate(_merge_into(result, source))


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in source.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        if isinstance(value, list):
            target[key] = list(value)
        elif isinstance(value, Mapping):
            existing = target.get(key)
            target[key] = _merge_into(dict(existing) if isinstance(existing, dict) else {}, value)
        else:
            target[key] = value
    return target
