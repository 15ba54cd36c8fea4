"""Stateless ranking algorithms.

Each function turns a vote aggregate (and, for the time-based ones, a
creation time) into a float comparable across voteables of the same type.
"""

from ballot.domain.ranking.hacker_news import DEFAULT_GRAVITY, hacker_news
from ballot.domain.ranking.reddit_hot import EPOCH, reddit_hot
from ballot.domain.ranking.simple import simple
from ballot.domain.ranking.wilson import Z_SCORES, wilson_score

__all__ = [
    "DEFAULT_GRAVITY",
    "EPOCH",
    "Z_SCORES",
    "hacker_news",
    "reddit_hot",
    "simple",
    "wilson_score",
]
