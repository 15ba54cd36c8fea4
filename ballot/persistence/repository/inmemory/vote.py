"""In-memory vote repository for testing."""

from collections import Counter
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from ballot.domain.model import Vote, VoteTally
from ballot.domain.repository.vote import VoteRepository
from ballot.domain.value import EntityRef, VoteId, normalize_scope


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []
        # Votes saved while duplicates were allowed never collide
        self._duplicates: set[VoteId] = set()

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        for vote in self._votes:
            if vote.id == vote_id:
                return vote
        return None

    async def find_by_key(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None
    ) -> Optional[Vote]:
        """Find the earliest vote on a (voter, voteable, scope) key."""
        for vote in self._votes:
            if vote.matches(voter, voteable, scope):
                return vote
        return None

    async def find_by_voter(self, voter: EntityRef) -> list[Vote]:
        """Find all votes by a voter."""
        return [
            v
            for v in self._votes
            if v.voter_type == voter.type and v.voter_id == voter.id
        ]

    async def find_by_voteable(
        self, voteable: EntityRef, scope: str | None
    ) -> list[Vote]:
        """Find all votes on an item within a scope."""
        scope = normalize_scope(scope)
        return [
            v
            for v in self._votes
            if v.voteable_type == voteable.type
            and v.voteable_id == voteable.id
            and v.scope == scope
        ]

    async def find_by_voteables(
        self,
        voteable_type: str,
        voteable_ids: Sequence[str],
        scope: str | None = None,
        since: datetime | None = None,
    ) -> list[Vote]:
        """Find votes on several items (batch query)."""
        if not voteable_ids:
            return []

        scope = normalize_scope(scope)
        ids = set(voteable_ids)
        return [
            v
            for v in self._votes
            if v.voteable_type == voteable_type
            and v.voteable_id in ids
            and (scope is None or v.scope == scope)
            and (since is None or v.created_at >= since)
        ]

    async def tally(self, voteable: EntityRef, scope: str | None) -> VoteTally:
        votes = await self.find_by_voteable(voteable, scope)
        return VoteTally.from_values([v.value for v in votes])

    async def tally_all_scopes(self, voteable: EntityRef) -> VoteTally:
        return VoteTally.from_values(
            [
                v.value
                for v in self._votes
                if v.voteable_type == voteable.type and v.voteable_id == voteable.id
            ]
        )

    async def tally_by_voteables(
        self,
        voteable_type: str,
        voteable_ids: Sequence[str],
        scope: str | None = None,
        since: datetime | None = None,
    ) -> VoteTally:
        votes = await self.find_by_voteables(voteable_type, voteable_ids, scope, since)
        return VoteTally.from_values([v.value for v in votes])

    async def count_since(
        self, voteable_type: str, since: datetime
    ) -> list[tuple[str, int]]:
        """Count recent votes per item, most votes first."""
        counts = Counter(
            v.voteable_id
            for v in self._votes
            if v.voteable_type == voteable_type and v.created_at >= since
        )
        return counts.most_common()

    async def save(self, vote: Vote, enforce_unique: bool = True) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        if enforce_unique:
            for existing in self._votes:
                if existing.id not in self._duplicates and existing.matches(
                    vote.voter, vote.voteable, vote.scope
                ):
                    raise IntegrityError("Duplicate vote", None, Exception())
        else:
            self._duplicates.add(vote.id)

        self._votes.append(vote)
        return vote

    async def update(self, vote: Vote) -> Vote:
        """Replace a stored vote with its recast version."""
        for i, existing in enumerate(self._votes):
            if existing.id == vote.id:
                self._votes[i] = vote
                return vote
        raise ValueError(f"Vote not found: {vote.id}")

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        self._votes = [v for v in self._votes if v.id != vote_id]
        self._duplicates.discard(vote_id)
