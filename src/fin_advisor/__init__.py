"""Financial advisor retrieval and client-profile core."""

from .config import AdvisorSettings, ProfileConfig, RetrievalConfig, ScoringConfig

__all__ = ["AdvisorSettings", "ProfileConfig", "RetrievalConfig", "ScoringConfig"]
