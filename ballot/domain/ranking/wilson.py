"""Wilson score confidence interval lower bound.

Ranks items by the lower bound of the Wilson score interval for the
proportion of positive votes, which accounts for the uncertainty of items
with few votes.

See https://www.evanmiller.org/how-not-to-sort-by-average-rating.html
"""

import math

# Z-scores for the supported confidence levels
Z_SCORES: dict[float, float] = {
    0.80: 1.28,
    0.85: 1.44,
    0.90: 1.64,
    0.95: 1.96,
    0.99: 2.58,
}

DEFAULT_CONFIDENCE = 0.95


def wilson_score(upvotes: int, total: int, confidence: float = DEFAULT_CONFIDENCE) -> float:
    """Wilson score lower bound.

    Args:
        upvotes: Number of positive votes
        total: Number of votes (positive, negative and neutral)
        confidence: One of the levels in ``Z_SCORES``; anything else uses 0.95

    Returns:
        Score in [0.0, 1.0] rounded to 6 places, 0.0 when there are no votes
    """
    if total <= 0:
        return 0.0

    z = Z_SCORES.get(confidence, Z_SCORES[DEFAULT_CONFIDENCE])
    n = float(total)
    phat = upvotes / n

    numerator = phat + z**2 / (2 * n) - z * math.sqrt(
        (phat * (1 - phat) + z**2 / (4 * n)) / n
    )
    denominator = 1 + z**2 / n

    return round(min(max(numerator / denominator, 0.0), 1.0), 6)
