"""Ranked-ladder selection used by the bootstrap."""
from enum import Enum


class LadderTier(Enum):
    """Apex tiers served by the ``*leagues/by-queue`` endpoints."""

    CHALLENGER = "challenger"
    GRANDMASTER = "grandmaster"
    MASTER = "master"

    @property
    def endpoint_segment(self) -> str:
        """Path segment, e.g. ``challengerleagues``."""
        return f"{self.value}leagues"

    @classmethod
    def from_string(cls, tier_str: str) -> 'LadderTier':
        """Create LadderTier from string; unknown values fall back to challenger."""
        try:
            return cls(tier_str.strip().lower())
        except ValueError:
            return cls.CHALLENGER


class LadderQueue(Enum):
    """Queue names used by league-v4."""

    RANKED_SOLO_5x5 = "RANKED_SOLO_5x5"
    RANKED_FLEX_SR = "RANKED_FLEX_SR"

    @classmethod
    def from_string(cls, queue_str: str) -> 'LadderQueue':
        try:
            return cls(queue_str.strip())
        except ValueError:
            return cls.RANKED_SOLO_5x5
