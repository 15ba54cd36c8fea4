"""Vote repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from ballot.domain.model import Vote, VoteTally
from ballot.domain.value import EntityRef, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity (the vote ledger).

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID.

        Args:
            vote_id: The vote's unique identifier

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_key(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None
    ) -> Optional[Vote]:
        """Find a voter's vote on an item within a scope.

        When duplicates are stored, the earliest vote is returned.

        Args:
            voter: The voter
            voteable: The voted item
            scope: Voting scope (None is its own partition)

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_voter(self, voter: EntityRef) -> List[Vote]:
        """Find all votes cast by a voter."""
        pass

    @abstractmethod
    async def find_by_voteable(
        self, voteable: EntityRef, scope: str | None
    ) -> List[Vote]:
        """Find all votes on an item within a scope."""
        pass

    @abstractmethod
    async def find_by_voteables(
        self,
        voteable_type: str,
        voteable_ids: Sequence[str],
        scope: str | None = None,
        since: datetime | None = None,
    ) -> List[Vote]:
        """Find votes on several items of one type (batch query).

        Args:
            voteable_type: Type of the items
            voteable_ids: Item IDs
            scope: Only votes in this scope; None means every scope
            since: Only votes created at or after this time

        Returns:
            Matching votes
        """
        pass

    @abstractmethod
    async def tally(self, voteable: EntityRef, scope: str | None) -> VoteTally:
        """Aggregate the votes on an item within a scope."""
        pass

    @abstractmethod
    async def tally_all_scopes(self, voteable: EntityRef) -> VoteTally:
        """Aggregate the votes on an item across every scope."""
        pass

    @abstractmethod
    async def tally_by_voteables(
        self,
        voteable_type: str,
        voteable_ids: Sequence[str],
        scope: str | None = None,
        since: datetime | None = None,
    ) -> VoteTally:
        """Aggregate the votes on several items of one type.

        Filters behave as in ``find_by_voteables``.
        """
        pass

    @abstractmethod
    async def count_since(
        self, voteable_type: str, since: datetime
    ) -> List[tuple[str, int]]:
        """Count votes per item cast since a time.

        Returns:
            (voteable_id, count) pairs, most votes first
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote, enforce_unique: bool = True) -> Vote:
        """Save a new vote.

        Args:
            vote: The vote to save
            enforce_unique: Reject a second vote on the same
                (voter, voteable, scope) key. Votes saved with False are
                duplicates: they never collide, with each other or with
                later unique votes

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the key is taken and uniqueness is enforced
        """
        pass

    @abstractmethod
    async def update(self, vote: Vote) -> Vote:
        """Persist a recast vote (value and updated_at)."""
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        pass
