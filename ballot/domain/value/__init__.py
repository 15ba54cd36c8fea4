"""Domain value objects for ballot."""

from ballot.domain.value.identifiers import EntityRef, Voteable, VoteId
from ballot.domain.value.types import (
    RankingAlgorithm,
    VoteAction,
    VoteDirection,
    normalize_scope,
)

__all__ = [
    # Identifiers
    "VoteId",
    "EntityRef",
    "Voteable",
    # Types
    "VoteDirection",
    "VoteAction",
    "RankingAlgorithm",
    "normalize_scope",
]
