import pytest

from fin_advisor.config import ProfileConfig
from fin_advisor.profile.extractor import extract_updates
from fin_advisor.profile.schema import ClientProfile


def _by_field(updates):
    return {update.field: update for update in updates}


def test_house_goal_message_proposes_goal_horizon_and_preference() -> None:
    message = "I want to save for a house in 5 years"
    updates = extract_updates(message, ClientProfile())

    assert [update.field for update in updates] == [
        "goals.medium_term",
        "financials.assets",
        "time_horizon",
        "preferences",
    ]
    fields = _by_field(updates)
    assert fields["goals.medium_term"].value == message
    assert fields["goals.medium_term"].confidence == 0.85
    assert fields["financials.assets"].confidence == 0.6
    assert fields["time_horizon"].confidence == 0.85
    assert fields["preferences"].confidence == 0.75


@pytest.mark.parametrize(
    ("message", "slot", "confidence"),
    [
        ("I need to plan for retirement", "goals.long_term", 0.9),
        ("Hoping to pay off debt in a few years", "goals.medium_term", 0.85),
        ("I want a new car next year", "goals.short_term", 0.8),
        ("I'd like to buy a boat", "goals.short_term", 0.6),
    ],
)
def test_goal_timeframes(message: str, slot: str, confidence: float) -> None:
    goal = extract_updates(message, ClientProfile())[0]

    assert goal.field == slot
    assert goal.confidence == confidence


def test_goal_moves_to_first_free_slot_when_timeframe_taken() -> None:
    profile = ClientProfile.model_validate({"goals": {"long_term": "Retire early"}})

    goal = extract_updates("I also plan for retirement travel", profile)[0]

    assert goal.field == "goals.short_term"


def test_no_goal_update_once_capacity_reached() -> None:
    profile = ClientProfile.model_validate(
        {"goals": {"short_term": "Emergency fund", "long_term": "Retire at 60"}}
    )

    updates = extract_updates("I want to buy a house in 5 years", profile)

    assert not any(update.field.startswith("goals.") for update in updates)
    relaxed = extract_updates("I want to buy a house in 5 years", profile, ProfileConfig(goal_capacity=3))
    assert relaxed[0].field == "goals.medium_term"


@pytest.mark.parametrize(
    ("message", "bucket", "confidence"),
    [
        ("I'm conservative and prefer safe, stable investments", "conservative", 0.9),
        ("Something balanced feels right", "moderate", 0.7),
        ("I can handle high risk for growth", "aggressive", 0.8),
    ],
)
def test_risk_bucket_value_is_bucket_name(message: str, bucket: str, confidence: float) -> None:
    risk = _by_field(extract_updates(message, ClientProfile()))["risk.tolerance"]

    assert risk.value == bucket
    assert risk.confidence == confidence


def test_set_risk_tolerance_is_never_overwritten() -> None:
    profile = ClientProfile.model_validate({"risk": {"tolerance": "moderate"}})

    updates = extract_updates("Actually I'm an aggressive, risky trader", profile)

    assert "risk.tolerance" not in _by_field(updates)


def test_set_scalars_are_never_proposed() -> None:
    profile = ClientProfile.model_validate(
        {"financials": {"assets": "$10,000"}, "time_horizon": "10 years"}
    )

    fields = _by_field(extract_updates("I have $50,000 in my account for 20 years", profile))

    assert "financials.assets" not in fields
    assert "time_horizon" not in fields


def test_asset_confidence_tiers() -> None:
    assert _by_field(extract_updates("I have $50,000", ClientProfile()))["financials.assets"].confidence == 0.9
    assert _by_field(extract_updates("About 40k saved", ClientProfile()))["financials.assets"].confidence == 0.9
    assert (
        _by_field(extract_updates("My portfolio holds 12 positions", ClientProfile()))[
            "financials.assets"
        ].confidence
        == 0.8
    )
    assert _by_field(extract_updates("My bank pays little", ClientProfile()))["financials.assets"].confidence == 0.5


def test_expectations_detect_percentages() -> None:
    percent = _by_field(extract_updates("I expect about 8 percent", ClientProfile()))
    symbol = _by_field(extract_updates("Maybe 6% is fine", ClientProfile()))
    vague = _by_field(extract_updates("I want decent gains", ClientProfile()))

    assert percent["expectations"].confidence == 0.9
    assert symbol["expectations"].confidence == 0.9
    assert vague["expectations"].confidence == 0.7


def test_list_caps_stop_extraction() -> None:
    profile = ClientProfile.model_validate(
        {"preferences": ["stocks", "bonds", "etfs"], "expectations": ["5%", "steady gains"]}
    )

    fields = _by_field(extract_updates("I prefer funds and expect 9% returns", profile))

    assert "preferences" not in fields
    assert "expectations" not in fields


def test_blank_message_yields_nothing() -> None:
    assert extract_updates("   ", ClientProfile()) == []


def test_invalid_inputs_are_rejected() -> None:
    with pytest.raises(TypeError):
        extract_updates(None, ClientProfile())  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        extract_updates("hello there", {})  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "message",
    ["I want a car soon", "Saving for a trip next month", "short term I need cash"],
)
def test_filled_short_term_goal_is_never_proposed_again(message: str) -> None:
    profile = ClientProfile.model_validate({"goals": {"short_term": "Emergency fund"}})

    fields = _by_field(extract_updates(message, profile))

    assert "goals.short_term" not in fields
