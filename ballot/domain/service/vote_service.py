"""Vote domain service (the vote ledger)."""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from ballot.config import VotingSettings
from ballot.domain.error import AlreadyVotedError, InvalidVoteValueError, SelfVoteError
from ballot.domain.model import Vote, VoteEvent
from ballot.domain.repository import VoteRepository
from ballot.domain.value import (
    EntityRef,
    VoteAction,
    VoteDirection,
    VoteId,
    normalize_scope,
)

from .base import Service
from .counter import VoteCounter
from .publisher import VoteEventPublisher
from .tally_service import TallyService


class VoteService(Service):
    """Domain service for casting, recasting and removing votes.

    Every ledger mutation is mirrored to the counter strategy in the same
    unit of work and then published as a ``VoteEvent``.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        counter: VoteCounter,
        tally_service: TallyService,
        publisher: VoteEventPublisher,
        settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote ledger
            counter: Counter strategy kept in step with the ledger
            tally_service: Aggregate reader used for event snapshots
            publisher: Vote event publisher
            settings: Voting settings
        """
        self.vote_repository = vote_repository
        self.counter = counter
        self.tally_service = tally_service
        self.publisher = publisher
        self.settings = settings

    async def cast_vote(
        self,
        voter: EntityRef,
        voteable: EntityRef,
        value: int,
        scope: str | None = None,
    ) -> Vote:
        """Cast a vote, or recast an existing one.

        Args:
            voter: Who votes
            voteable: What is voted on
            value: Signed integer; the sign gives the direction
            scope: Optional voting scope

        Returns:
            The created or recast vote

        Raises:
            SelfVoteError: If voter and voteable are the same entity
            InvalidVoteValueError: If value is not an integer
            AlreadyVotedError: If a vote exists and recast is disabled
        """
        scope = normalize_scope(scope)
        with logfire.span(
            "vote_service.cast_vote",
            voter=str(voter),
            voteable=str(voteable),
            scope=scope,
            value=value,
        ):
            self._validate(voter, voteable, value)

            if self.settings.allow_duplicate_votes:
                return await self._create(voter, voteable, value, scope, False)

            existing = await self.vote_repository.find_by_key(voter, voteable, scope)
            if existing:
                return await self._handle_existing(existing, value)

            try:
                return await self._create(voter, voteable, value, scope, True)
            except IntegrityError:
                # Lost a race with a concurrent cast on the same key
                logfire.warn(
                    "Duplicate vote attempt",
                    voter=str(voter),
                    voteable=str(voteable),
                    scope=scope,
                )
                existing = await self.vote_repository.find_by_key(
                    voter, voteable, scope
                )
                if existing is None:
                    raise
                return await self._handle_existing(existing, value)

    async def upvote(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> Vote:
        """Cast a +1 vote."""
        return await self.cast_vote(voter, voteable, 1, scope)

    async def downvote(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> Vote:
        """Cast a -1 vote."""
        return await self.cast_vote(voter, voteable, -1, scope)

    async def remove_vote(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> Vote | None:
        """Remove a vote.

        Returns:
            The removed vote, or None if there was nothing to remove
        """
        scope = normalize_scope(scope)
        with logfire.span(
            "vote_service.remove_vote",
            voter=str(voter),
            voteable=str(voteable),
            scope=scope,
        ):
            existing = await self.vote_repository.find_by_key(voter, voteable, scope)
            if existing is None:
                logfire.info(
                    "No vote to remove",
                    voter=str(voter),
                    voteable=str(voteable),
                    scope=scope,
                )
                return None

            await self._delete(existing)
            logfire.info(
                "Vote removed", vote_id=str(existing.id), voteable=str(voteable)
            )
            return existing

    async def toggle_vote(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> Vote | None:
        """Remove the vote if present, otherwise upvote.

        Returns:
            The new upvote, or None if a vote was removed
        """
        scope = normalize_scope(scope)
        with logfire.span(
            "vote_service.toggle_vote",
            voter=str(voter),
            voteable=str(voteable),
            scope=scope,
        ):
            existing = await self.vote_repository.find_by_key(voter, voteable, scope)
            if existing:
                await self._delete(existing)
                return None
            return await self.upvote(voter, voteable, scope)

    async def find_vote(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> Vote | None:
        return await self.vote_repository.find_by_key(voter, voteable, scope)

    @staticmethod
    def direction(vote: Vote) -> VoteDirection:
        return vote.direction

    async def has_voted(
        self,
        voter: EntityRef,
        voteable: EntityRef,
        direction: VoteDirection | int | None = None,
        scope: str | None = None,
    ) -> bool:
        """Check whether a voter voted on an item.

        Args:
            direction: A direction, an exact vote value, or None for any vote
        """
        vote = await self.find_vote(voter, voteable, scope)
        if vote is None:
            return False
        if direction is None:
            return True
        if isinstance(direction, VoteDirection):
            return vote.direction == direction
        return vote.value == direction

    async def vote_value_for(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> int | None:
        vote = await self.find_vote(voter, voteable, scope)
        return vote.value if vote else None

    async def vote_direction_for(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None = None
    ) -> VoteDirection | None:
        vote = await self.find_vote(voter, voteable, scope)
        return vote.direction if vote else None

    async def vote_count(
        self, voter: EntityRef, direction: VoteDirection | None = None
    ) -> int:
        """Number of votes cast by a voter, optionally in one direction."""
        votes = await self.vote_repository.find_by_voter(voter)
        if direction is None:
            return len(votes)
        return sum(1 for vote in votes if vote.direction == direction)

    async def voted_items(
        self, voter: EntityRef, voteable_type: str, scope: str | None = None
    ) -> list[EntityRef]:
        """Distinct items of a type that a voter voted on within a scope."""
        scope = normalize_scope(scope)
        votes = await self.vote_repository.find_by_voter(voter)
        items: dict[tuple[str, str], EntityRef] = {}
        for vote in votes:
            if vote.voteable_type == voteable_type and vote.scope == scope:
                items.setdefault(vote.voteable.key, vote.voteable)
        return list(items.values())

    def _validate(self, voter: EntityRef, voteable: EntityRef, value: object) -> None:
        if voter.same_entity(voteable) and not self.settings.allow_self_vote:
            logfire.warn("Self vote rejected", voter=str(voter))
            raise SelfVoteError()

        # bool is an int subclass but never a vote value
        if isinstance(value, bool) or not isinstance(value, int):
            logfire.warn("Invalid vote value", value=repr(value))
            raise InvalidVoteValueError(value)

    async def _create(
        self,
        voter: EntityRef,
        voteable: EntityRef,
        value: int,
        scope: str | None,
        enforce_unique: bool,
    ) -> Vote:
        vote = Vote(
            id=VoteId(uuid4()),
            voter_type=voter.type,
            voter_id=voter.id,
            voteable_type=voteable.type,
            voteable_id=voteable.id,
            value=value,
            scope=scope,
        )
        saved = await self.vote_repository.save(vote, enforce_unique=enforce_unique)
        await self.counter.on_create(saved.voteable, scope, value)
        logfire.info("Vote cast", vote_id=str(saved.id), value=value)

        await self._publish(VoteAction.CREATED, saved)
        return saved

    async def _handle_existing(self, existing: Vote, value: int) -> Vote:
        if not self.settings.allow_recast:
            logfire.warn(
                "Vote already exists and recast is disabled",
                vote_id=str(existing.id),
            )
            raise AlreadyVotedError()

        recast = existing.recast(value)
        await self.vote_repository.update(recast)
        await self.counter.on_update(
            existing.voteable, existing.scope, existing.value, value
        )
        logfire.info(
            "Vote recast",
            vote_id=str(existing.id),
            old_value=existing.value,
            new_value=value,
        )

        await self._publish(VoteAction.UPDATED, recast)
        return recast

    async def _delete(self, vote: Vote) -> None:
        await self.vote_repository.delete(vote.id)
        await self.counter.on_delete(vote.voteable, vote.scope, vote.value)
        await self._publish(VoteAction.REMOVED, vote)

    async def _publish(self, action: VoteAction, vote: Vote) -> None:
        snapshot = await self.tally_service.snapshot(vote.voteable, vote.scope)
        await self.publisher.publish(
            VoteEvent(action=action, vote=vote, snapshot=snapshot)
        )
