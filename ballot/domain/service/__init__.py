"""Domain services."""

from .base import Service
from .counter import CachedVoteCounter, LiveVoteCounter, VoteCounter
from .karma_service import KarmaService
from .publisher import VoteEventPublisher
from .tally_service import TallyService
from .vote_service import VoteService

__all__ = [
    "CachedVoteCounter",
    "KarmaService",
    "LiveVoteCounter",
    "Service",
    "TallyService",
    "VoteCounter",
    "VoteEventPublisher",
    "VoteService",
]
