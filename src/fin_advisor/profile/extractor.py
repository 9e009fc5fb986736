"""Rule-based extraction of profile updates from chat utterances.

Each category is one `ExtractionRule` in `RULES`. A rule only runs while
its slot has capacity, so the extractor never proposes overwriting a set
scalar. Every firing rule emits exactly one update per utterance; the
value is the trimmed utterance, except for risk tolerance which records
the matched bucket name.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from fin_advisor.config import ProfileConfig
from fin_advisor.profile.schema import GOAL_SLOTS, ClientProfile, goal_count
from fin_advisor.types import ProfileUpdate

logger = logging.getLogger(__name__)

GOAL_KEYWORDS = ("want", "goal", "plan", "save", "buy", "need", "hope", "wish", "intend", "aim")

# Checked from most to least specific, long before short, so "5 years" is a
# medium-term goal rather than a short-term one through its "year". Only a
# bare "year" or "month" with no longer cue is a short-term cue.
GOAL_TIMEFRAMES: tuple[tuple[str, re.Pattern[str], float], ...] = (
    (
        "long_term",
        re.compile(r"\b(?:retire(?:ment)?|long[- ]term|decades?|(?:10|20|30) years)\b"),
        0.9,
    ),
    (
        "medium_term",
        re.compile(r"\b(?:few years|medium[- ]term|[357] years)\b"),
        0.85,
    ),
    (
        "short_term",
        re.compile(r"\b(?:soon|months?|years?|immediate(?:ly)?|next year|short[- ]term)\b"),
        0.8,
    ),
)
GOAL_FALLBACK_CONFIDENCE = 0.6
GOAL_MIN_LENGTH = 10

RISK_BUCKETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("conservative", ("conservative", "safe", "low risk", "careful", "cautious", "stable", "secure")),
    ("moderate", ("moderate", "balanced", "medium", "comfortable", "reasonable", "middle")),
    ("aggressive", ("aggressive", "high risk", "growth", "bold", "risky", "adventurous")),
)

ASSET_KEYWORDS = ("saving", "asset", "worth", "total", "account", "bank", "portfolio", "investment")
TIME_KEYWORDS = ("year", "month", "time", "when", "timeline", "horizon", "period", "term")
PREFERENCE_KEYWORDS = (
    "prefer",
    "like",
    "want",
    "interested",
    "stock",
    "bond",
    "etf",
    "fund",
    "crypto",
    "real estate",
)
EXPECTATION_KEYWORDS = ("expect", "hope", "return", "gain", "profit", "earn")

PREFERENCE_CONFIDENCE = 0.75

_DIGITS = re.compile(r"\d")
_MONEY = re.compile(r"\$[\d,]+|\d+k\b|\d+000")
_PERCENT = re.compile(r"%|\d+(?:\.\d+)?\s*percent\b")


@dataclass(slots=True, frozen=True)
class Utterance:
    text: str
    lowered: str

    @classmethod
    def parse(cls, raw: str) -> Utterance:
        text = raw.strip()
        return cls(text=text, lowered=text.lower())

    def has_any(self, keywords: tuple[str, ...]) -> bool:
        return any(keyword in self.lowered for keyword in keywords)

    @property
    def has_digits(self) -> bool:
        return _DIGITS.search(self.text) is not None


@dataclass(slots=True, frozen=True)
class ExtractionRule:
    """One profile category.

    `target` returns the field path to update, or None when no slot is
    available for this utterance.
    """

    category: str
    has_capacity: Callable[[ClientProfile, ProfileConfig], bool]
    trigger: Callable[[Utterance], bool]
    target: Callable[[Utterance, ClientProfile], str | None]
    value: Callable[[Utterance], str]
    confidence: Callable[[Utterance], float]


def _trimmed(utterance: Utterance) -> str:
    return utterance.text


def _fixed(path: str) -> Callable[[Utterance, ClientProfile], str | None]:
    return lambda utterance, profile: path


# Goals


def _goal_timeframe(utterance: Utterance) -> tuple[str, float]:
    for slot, pattern, confidence in GOAL_TIMEFRAMES:
        if pattern.search(utterance.lowered):
            return slot, confidence
    return "short_term", GOAL_FALLBACK_CONFIDENCE


def _goal_target(utterance: Utterance, profile: ClientProfile) -> str | None:
    slot, _ = _goal_timeframe(utterance)
    if getattr(profile.goals, slot) is None:
        return f"goals.{slot}"
    for candidate in GOAL_SLOTS:
        if getattr(profile.goals, candidate) is None:
            return f"goals.{candidate}"
    return None


def _goal_trigger(utterance: Utterance) -> bool:
    return utterance.has_any(GOAL_KEYWORDS) or len(utterance.text) > GOAL_MIN_LENGTH


# Risk tolerance


def _risk_bucket(utterance: Utterance) -> tuple[str, float] | None:
    best: tuple[str, float] | None = None
    for level, keywords in RISK_BUCKETS:
        matches = sum(1 for keyword in keywords if keyword in utterance.lowered)
        if not matches:
            continue
        confidence = round(min(0.9, 0.6 + 0.1 * matches), 2)
        if best is None or confidence > best[1]:
            best = (level, confidence)
    return best


def _risk_value(utterance: Utterance) -> str:
    bucket = _risk_bucket(utterance)
    return bucket[0] if bucket else ""


def _risk_confidence(utterance: Utterance) -> float:
    bucket = _risk_bucket(utterance)
    return bucket[1] if bucket else 0.0


# Assets


def _asset_trigger(utterance: Utterance) -> bool:
    return (
        utterance.has_digits
        or _MONEY.search(utterance.lowered) is not None
        or utterance.has_any(ASSET_KEYWORDS)
    )


def _asset_confidence(utterance: Utterance) -> float:
    if _MONEY.search(utterance.lowered):
        return 0.9
    if utterance.has_digits and utterance.has_any(ASSET_KEYWORDS):
        return 0.8
    if utterance.has_digits:
        return 0.6
    return 0.5


# Time horizon


def _horizon_trigger(utterance: Utterance) -> bool:
    return utterance.has_any(TIME_KEYWORDS) or utterance.has_digits


def _horizon_confidence(utterance: Utterance) -> float:
    has_keyword = utterance.has_any(TIME_KEYWORDS)
    if has_keyword and utterance.has_digits:
        return 0.85
    if has_keyword:
        return 0.7
    return 0.6


# Expectations


def _has_percent(utterance: Utterance) -> bool:
    return _PERCENT.search(utterance.lowered) is not None


RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule(
        category="goals",
        has_capacity=lambda profile, config: goal_count(profile) < config.goal_capacity,
        trigger=_goal_trigger,
        target=_goal_target,
        value=_trimmed,
        confidence=lambda utterance: _goal_timeframe(utterance)[1],
    ),
    ExtractionRule(
        category="risk",
        has_capacity=lambda profile, config: profile.risk.tolerance is None,
        trigger=lambda utterance: _risk_bucket(utterance) is not None,
        target=_fixed("risk.tolerance"),
        value=_risk_value,
        confidence=_risk_confidence,
    ),
    ExtractionRule(
        category="assets",
        has_capacity=lambda profile, config: profile.financials.assets is None,
        trigger=_asset_trigger,
        target=_fixed("financials.assets"),
        value=_trimmed,
        confidence=_asset_confidence,
    ),
    ExtractionRule(
        category="time_horizon",
        has_capacity=lambda profile, config: profile.time_horizon is None,
        trigger=_horizon_trigger,
        target=_fixed("time_horizon"),
        value=_trimmed,
        confidence=_horizon_confidence,
    ),
    ExtractionRule(
        category="preferences",
        has_capacity=lambda profile, config: len(profile.preferences) < config.preference_cap,
        trigger=lambda utterance: utterance.has_any(PREFERENCE_KEYWORDS),
        target=_fixed("preferences"),
        value=_trimmed,
        confidence=lambda utterance: PREFERENCE_CONFIDENCE,
    ),
    ExtractionRule(
        category="expectations",
        has_capacity=lambda profile, config: len(profile.expectations) < config.expectation_cap,
        trigger=lambda utterance: utterance.has_any(EXPECTATION_KEYWORDS) or _has_percent(utterance),
        target=_fixed("expectations"),
        value=_trimmed,
        confidence=lambda utterance: 0.9 if _has_percent(utterance) else 0.7,
    ),
)


def extract_updates(
    utterance: str,
    profile: ClientProfile,
    config: ProfileConfig | None = None,
    *,
    rules: tuple[ExtractionRule, ...] = RULES,
) -> list[ProfileUpdate]:
    """Propose at most one update per category for unfilled capacity."""

    if not isinstance(utterance, str):
        raise TypeError(f"utterance must be a string, got {type(utterance).__name__}")
    if not isinstance(profile, ClientProfile):
        raise TypeError(f"expected ClientProfile, got {type(profile).__name__}")
    config = config or ProfileConfig()

    parsed = Utterance.parse(utterance)
    if not parsed.text:
        return []

    updates: list[ProfileUpdate] = []
    for rule in rules:
        if not rule.has_capacity(profile, config) or not rule.trigger(parsed):
            continue
        path = rule.target(parsed, profile)
        if path is None:
            continue
        update = ProfileUpdate(field=path, value=rule.value(parsed), confidence=rule.confidence(parsed))
        logger.debug("Extracted %s update (confidence=%.2f)", update.field, update.confidence)
        updates.append(update)
    return updates
