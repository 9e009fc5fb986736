"""Configuration models for the advisory retrieval and profile core."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringConfig(BaseModel):
    """Weights for the lexical relevance scorer."""

    base_score: float = Field(default=0.5, ge=0.0, le=1.0)
    title_weight: float = Field(default=0.2, ge=0.0)
    content_weight: float = Field(default=0.15, ge=0.0)
    content_cap: float = Field(default=0.3, ge=0.0)
    source_weight: float = Field(default=0.1, ge=0.0)
    coverage_bonus: float = Field(default=0.1, ge=0.0)
    max_score: float = Field(default=0.99, gt=0.0, le=1.0)
    min_token_length: int = Field(default=3, ge=1)


class RetrievalConfig(BaseModel):
    """Configures ranking limits and the remote backend call."""

    default_limit: int = Field(default=5, ge=1)
    threshold: float = Field(default=0.65, ge=0.0, le=1.0)
    timeout_seconds: float = Field(default=5.0, gt=0.0)
    snippet_length: int = Field(default=200, ge=1)


class ProfileConfig(BaseModel):
    """Configures extraction capacity and the update apply cutoff."""

    apply_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    goal_capacity: int = Field(default=2, ge=1, le=3)
    preference_cap: int = Field(default=3, ge=1)
    expectation_cap: int = Field(default=2, ge=1)


class AdvisorSettings(BaseSettings):
    """Environment-driven settings.

    Vectorize credentials accept both the current and the legacy variable
    names. The remote backend is only used when all three are present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    vectorize_access_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "VECTORIZE_ACCESS_TOKEN", "VECTORIZE_PIPELINE_ACCESS_TOKEN"
        ),
    )
    vectorize_org_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("VECTORIZE_ORG_ID", "VECTORIZE_ORGANIZATION_ID"),
    )
    vectorize_pipeline_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("VECTORIZE_PIPELINE_ID"),
    )
    vectorize_base_url: str = Field(
        default="https://api.vectorize.io/v1",
        validation_alias=AliasChoices("VECTORIZE_BASE_URL"),
    )

    retrieval_threshold: float = Field(default=0.65, ge=0.0, le=1.0)
    retrieval_timeout_seconds: float = Field(default=5.0, gt=0.0)
    profile_apply_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    log_level: str = "INFO"

    @property
    def remote_enabled(self) -> bool:
        return bool(
            self.vectorize_access_token
            and self.vectorize_org_id
            and self.vectorize_pipeline_id
        )

    def build_retrieval_config(self) -> RetrievalConfig:
        return RetrievalConfig(
            threshold=self.retrieval_threshold,
            timeout_seconds=self.retrieval_timeout_seconds,
        )

    def build_profile_config(self) -> ProfileConfig:
        return ProfileConfig(apply_threshold=self.profile_apply_threshold)
