"""Reddit "hot" ranking.

Log-scaled net score plus a linear bonus for creation time: every 45000
seconds (12.5 hours) of recency is worth a tenfold increase in votes.
Scores use absolute creation time, so they keep growing with the calendar.
"""

import math
from datetime import datetime, timezone

# Fixed epoch of the reference implementation (2005-12-08 07:46:43 UTC)
EPOCH = datetime(2005, 12, 8, 7, 46, 43, tzinfo=timezone.utc)

SECONDS_PER_ORDER = 45000.0


def _epoch_seconds(created_at: datetime) -> int:
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return int(created_at.timestamp()) - int(EPOCH.timestamp())


def reddit_hot(plusminus: int, created_at: datetime) -> float:
    """Hot score for a net vote score and creation time.

    Naive datetimes are taken to be UTC.
    """
    order = math.log10(max(abs(plusminus), 1))
    sign = (plusminus > 0) - (plusminus < 0)
    seconds = _epoch_seconds(created_at)
    return round(sign * order + seconds / SECONDS_PER_ORDER, 7)
