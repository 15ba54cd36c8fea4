"""Repository interfaces for the ballot domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from ballot.domain.repository.counter import CounterRepository
from ballot.domain.repository.karma import KarmaCacheRepository
from ballot.domain.repository.ownership import OwnershipRepository
from ballot.domain.repository.vote import VoteRepository

__all__ = [
    "VoteRepository",
    "CounterRepository",
    "OwnershipRepository",
    "KarmaCacheRepository",
]
