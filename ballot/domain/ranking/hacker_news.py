"""Hacker News ranking.

Score = (P - 1) / (T + 2)^G, where P is the net score, T the age in hours
and G the gravity. The submitter's own point is excluded.
"""

from datetime import datetime, timezone

DEFAULT_GRAVITY = 1.8


def hacker_news(
    plusminus: int,
    created_at: datetime,
    now: datetime | None = None,
    gravity: float = DEFAULT_GRAVITY,
) -> float:
    """Hacker News score.

    Args:
        plusminus: Net vote score
        created_at: Creation time of the item (naive means UTC)
        now: Evaluation time, defaults to the current time
        gravity: Decay exponent; higher decays faster

    Returns:
        The score, 0.0 for future-dated items
    """
    now = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    age_hours = (now - created_at).total_seconds() / 3600
    if age_hours < 0:
        return 0.0

    points = max(plusminus - 1, 0)
    return points / (age_hours + 2) ** gravity
