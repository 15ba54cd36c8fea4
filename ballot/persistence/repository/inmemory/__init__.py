"""In-memory repository implementations for testing."""

from .counter import InMemoryCounterRepository
from .karma import InMemoryKarmaCacheRepository
from .ownership import InMemoryOwnershipRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCounterRepository",
    "InMemoryKarmaCacheRepository",
    "InMemoryOwnershipRepository",
    "InMemoryVoteRepository",
]
