"""Client profile schema and the flexible completion model.

A profile is complete when at least two of the three goal timeframes are
set, and risk tolerance, assets, time horizon, one preference and one
expectation are present. Income, expenses and risk history are optional.
Completion is scored out of six points: goals contribute up to two, the
five other requirements one each.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

GOAL_SLOTS: tuple[str, ...] = ("short_term", "medium_term", "long_term")
REQUIRED_GOALS = 2
COMPLETION_POINTS = 6

_FIELD_LABELS: dict[str, str] = {
    "short_term_goals": "short-term goals",
    "medium_term_goals": "medium-term goals",
    "long_term_goals": "long-term goals",
    "risk_tolerance": "risk tolerance",
    "assets": "assets",
    "time_horizon": "time horizon",
    "preferences": "investment preferences",
    "expectations": "return expectations",
}


def _clean_scalar(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_sequence(values: list[str]) -> list[str]:
    cleaned: list[str] = []
    for value in values:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class Goals(_Section):
    short_term: str | None = None
    medium_term: str | None = None
    long_term: str | None = None

    @field_validator("short_term", "medium_term", "long_term")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return _clean_scalar(value)


class Risk(_Section):
    tolerance: str | None = None
    history: str | None = None

    @field_validator("tolerance", "history")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return _clean_scalar(value)


class Financials(_Section):
    income: str | None = None
    assets: str | None = None
    expenses: str | None = None

    @field_validator("income", "assets", "expenses")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return _clean_scalar(value)


class ClientProfile(_Section):
    """Structured trader/investor profile.

    Scalars are either None or a non-empty trimmed string. Preferences and
    expectations keep insertion order without duplicates. An explicit
    `null` in JSON reads the same as an absent key.
    """

    goals: Goals = Field(default_factory=Goals)
    risk: Risk = Field(default_factory=Risk)
    financials: Financials = Field(default_factory=Financials)
    time_horizon: str | None = None
    preferences: list[str] = Field(default_factory=list)
    expectations: list[str] = Field(default_factory=list)

    @field_validator("goals", "risk", "financials", mode="before")
    @classmethod
    def _null_section(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("preferences", "expectations", mode="before")
    @classmethod
    def _null_sequence(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("preferences", "expectations")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return _clean_sequence(value)

    @field_validator("time_horizon")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return _clean_scalar(value)


def empty_profile() -> ClientProfile:
    return ClientProfile()


def goal_count(profile: ClientProfile) -> int:
    return sum(1 for slot in GOAL_SLOTS if getattr(profile.goals, slot) is not None)


def missing_fields(profile: ClientProfile) -> list[str]:
    """List unmet completeness conditions in a stable order.

    While fewer than two goals are set, every empty goal slot is listed.
    """

    _require_profile(profile)
    missing: list[str] = []
    if goal_count(profile) < REQUIRED_GOALS:
        for slot in GOAL_SLOTS:
            if getattr(profile.goals, slot) is None:
                missing.append(f"{slot}_goals")
    if profile.risk.tolerance is None:
        missing.append("risk_tolerance")
    if profile.financials.assets is None:
        missing.append("assets")
    if profile.time_horizon is None:
        missing.append("time_horizon")
    if not profile.preferences:
        missing.append("preferences")
    if not profile.expectations:
        missing.append("expectations")
    return missing


def is_complete(profile: ClientProfile) -> bool:
    return not missing_fields(profile)


def completion_percentage(profile: ClientProfile) -> int:
    _require_profile(profile)
    points = min(goal_count(profile), REQUIRED_GOALS)
    points += sum(
        (
            profile.risk.tolerance is not None,
            profile.financials.assets is not None,
            profile.time_horizon is not None,
            bool(profile.preferences),
            bool(profile.expectations),
        )
    )
    return round(100 * points / COMPLETION_POINTS)


def field_label(tag: str) -> str:
    return _FIELD_LABELS.get(tag, tag.replace("_", " "))


def summarize(profile: ClientProfile) -> str:
    """Human-readable progress line handed to the conversation model."""

    missing = missing_fields(profile)
    completed: list[str] = []
    for slot in GOAL_SLOTS:
        if getattr(profile.goals, slot) is not None:
            completed.append(field_label(f"{slot}_goals"))
    for tag, present in (
        ("risk_tolerance", profile.risk.tolerance is not None),
        ("assets", profile.financials.assets is not None),
        ("time_horizon", profile.time_horizon is not None),
        ("preferences", bool(profile.preferences)),
        ("expectations", bool(profile.expectations)),
    ):
        if present:
            completed.append(field_label(tag))

    parts: list[str] = []
    if completed:
        parts.append(f"So far, you have provided: {', '.join(completed)}.")
    if missing:
        parts.append(
            f"Missing: {', '.join(field_label(tag) for tag in missing)}. "
            "Please continue asking follow-up questions to fill those."
        )
    else:
        parts.append("The profile is complete.")
    return " ".join(parts)


def format_profile_block(profile: ClientProfile) -> str:
    """Render the profile values as a plain-text block."""

    lines = ["CLIENT PROFILE:"]
    for slot in GOAL_SLOTS:
        value = getattr(profile.goals, slot)
        if value is not None:
            lines.append(f"- {field_label(slot + '_goals').capitalize()}: {value}")
    if profile.risk.tolerance is not None:
        lines.append(f"- Risk tolerance: {profile.risk.tolerance}")
    if profile.risk.history is not None:
        lines.append(f"- Risk history: {profile.risk.history}")
    for name in ("income", "assets", "expenses"):
        value = getattr(profile.financials, name)
        if value is not None:
            lines.append(f"- {name.capitalize()}: {value}")
    if profile.time_horizon is not None:
        lines.append(f"- Time horizon: {profile.time_horizon}")
    if profile.preferences:
        lines.append(f"- Preferences: {'; '.join(profile.preferences)}")
    if profile.expectations:
        lines.append(f"- Expectations: {'; '.join(profile.expectations)}")
    lines.append(f"- Completion: {completion_percentage(profile)}%")
    return "\n".join(lines)


def _require_profile(profile: object) -> None:
    if not isinstance(profile, ClientProfile):
        raise TypeError(f"expected ClientProfile, got {type(profile).__name__}")
