"""PostgreSQL repository implementations."""

from ballot.persistence.repository.counter import PostgresCounterRepository
from ballot.persistence.repository.karma import PostgresKarmaCacheRepository
from ballot.persistence.repository.ownership import PostgresOwnershipRepository
from ballot.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresVoteRepository",
    "PostgresCounterRepository",
    "PostgresOwnershipRepository",
    "PostgresKarmaCacheRepository",
]
