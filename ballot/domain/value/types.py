"""Domain value types for ballot."""

from enum import Enum


class VoteDirection(str, Enum):
    """Direction of a vote, derived from the sign of its value."""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"

    @classmethod
    def of(cls, value: int) -> "VoteDirection":
        """Direction for a signed vote value."""
        if value > 0:
            return cls.UP
        if value < 0:
            return cls.DOWN
        return cls.NEUTRAL


class VoteAction(str, Enum):
    """Ledger mutation kinds reported in vote events."""

    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"


class RankingAlgorithm(str, Enum):
    """Ranking algorithms available for generic ranking calls."""

    WILSON_SCORE = "wilson_score"
    REDDIT_HOT = "reddit_hot"
    HACKER_NEWS = "hacker_news"
    SIMPLE = "simple"


def normalize_scope(scope: str | None) -> str | None:
    """The empty scope and ``None`` both name the unscoped partition."""
    return scope or None
