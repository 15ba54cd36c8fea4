"""Domain model entities for ballot."""

from ballot.domain.model.event import VoteEvent, VoteSnapshot
from ballot.domain.model.karma import (
    KarmaBreakdown,
    KarmaDecay,
    KarmaLevel,
    KarmaProgress,
    KarmaSource,
)
from ballot.domain.model.tally import TallyDelta, VoteTally
from ballot.domain.model.vote import Vote

__all__ = [
    "Vote",
    "VoteTally",
    "TallyDelta",
    "VoteEvent",
    "VoteSnapshot",
    "KarmaSource",
    "KarmaDecay",
    "KarmaLevel",
    "KarmaBreakdown",
    "KarmaProgress",
]
