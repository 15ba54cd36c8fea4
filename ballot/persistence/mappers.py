"""Mapping between database rows and domain models."""

from typing import Any, Dict
from uuid import UUID

from ballot.domain.model import Vote, VoteTally
from ballot.domain.value import VoteId

# Counter rows store the unscoped partition as an empty string; votes store
# it as NULL and never hold an empty scope
NULL_SCOPE = ""


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        voter_type=row["voter_type"],
        voter_id=row["voter_id"],
        voteable_type=row["voteable_type"],
        voteable_id=row["voteable_id"],
        value=row["value"],
        scope=row["scope"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return vote.model_dump()


def row_to_tally(row: Dict[str, Any]) -> VoteTally:
    """Convert a counter or aggregate row to a VoteTally."""
    return VoteTally(
        total_count=int(row["votes_count"] or 0),
        total_value=int(row["votes_total"] or 0),
        positive_count=int(row["upvotes_count"] or 0),
        negative_count=int(row["downvotes_count"] or 0),
    )


def scope_to_column(scope: str | None) -> str:
    return NULL_SCOPE if scope is None else scope
