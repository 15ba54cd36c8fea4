"""Vote counter strategies.

The ledger reports every mutation to a ``VoteCounter``; readers ask it for
tallies. ``CachedVoteCounter`` keeps atomic counters in storage,
``LiveVoteCounter`` aggregates the ledger on every read.
"""

from abc import ABC, abstractmethod

import logfire

from ballot.domain.model import TallyDelta, VoteTally
from ballot.domain.repository import CounterRepository, VoteRepository
from ballot.domain.value import EntityRef


class VoteCounter(ABC):
    """Counter maintenance and aggregate reads for voteables."""

    @abstractmethod
    async def on_create(self, voteable: EntityRef, scope: str | None, value: int) -> None:
        pass

    @abstractmethod
    async def on_update(
        self, voteable: EntityRef, scope: str | None, old_value: int, new_value: int
    ) -> None:
        pass

    @abstractmethod
    async def on_delete(self, voteable: EntityRef, scope: str | None, value: int) -> None:
        pass

    @abstractmethod
    async def tally(self, voteable: EntityRef, scope: str | None = None) -> VoteTally:
        """Tally of one scope partition of an item."""
        pass

    @abstractmethod
    async def overall_tally(self, voteable: EntityRef) -> VoteTally:
        """Tally of an item across every scope."""
        pass


class LiveVoteCounter(VoteCounter):
    """Aggregates directly over the ledger; mutation hooks do nothing."""

    def __init__(self, vote_repository: VoteRepository) -> None:
        self.vote_repository = vote_repository

    async def on_create(self, voteable: EntityRef, scope: str | None, value: int) -> None:
        return None

    async def on_update(
        self, voteable: EntityRef, scope: str | None, old_value: int, new_value: int
    ) -> None:
        return None

    async def on_delete(self, voteable: EntityRef, scope: str | None, value: int) -> None:
        return None

    async def tally(self, voteable: EntityRef, scope: str | None = None) -> VoteTally:
        return await self.vote_repository.tally(voteable, scope)

    async def overall_tally(self, voteable: EntityRef) -> VoteTally:
        return await self.vote_repository.tally_all_scopes(voteable)


class CachedVoteCounter(VoteCounter):
    """Maintains per-(voteable, scope) counters with atomic increments."""

    def __init__(
        self,
        counter_repository: CounterRepository,
        vote_repository: VoteRepository,
    ) -> None:
        """Initialize cached counter.

        Args:
            counter_repository: Storage for counter rows
            vote_repository: Ledger, used to fill missing rows and reconcile
        """
        self.counter_repository = counter_repository
        self.vote_repository = vote_repository

    async def _apply(
        self, voteable: EntityRef, scope: str | None, delta: TallyDelta
    ) -> None:
        if delta.is_zero:
            return

        if await self.counter_repository.get(voteable, scope) is None:
            # First write to this row: the ledger already holds the mutation
            live = await self.vote_repository.tally(voteable, scope)
            await self.counter_repository.seed(voteable, scope, live, delta)
            return
        await self.counter_repository.apply(voteable, scope, delta)

    async def on_create(self, voteable: EntityRef, scope: str | None, value: int) -> None:
        await self._apply(voteable, scope, TallyDelta.for_create(value))

    async def on_update(
        self, voteable: EntityRef, scope: str | None, old_value: int, new_value: int
    ) -> None:
        await self._apply(voteable, scope, TallyDelta.for_update(old_value, new_value))

    async def on_delete(self, voteable: EntityRef, scope: str | None, value: int) -> None:
        await self._apply(voteable, scope, TallyDelta.for_delete(value))

    async def tally(self, voteable: EntityRef, scope: str | None = None) -> VoteTally:
        cached = await self.counter_repository.get(voteable, scope)
        if cached is not None:
            return cached

        # No row yet: votes may predate the cache, so fill it from the ledger
        live = await self.vote_repository.tally(voteable, scope)
        if live.total_count:
            await self.counter_repository.seed(voteable, scope, live)
        return live

    async def overall_tally(self, voteable: EntityRef) -> VoteTally:
        cached = await self.counter_repository.get_all_scopes(voteable)
        if cached is None:
            return await self.vote_repository.tally_all_scopes(voteable)
        return cached

    async def reconcile(self, voteable: EntityRef, scope: str | None = None) -> bool:
        """Recompute a counter row from the ledger.

        Returns:
            True if the cached row disagreed with the ledger and was repaired
        """
        with logfire.span(
            "vote_counter.reconcile", voteable=str(voteable), scope=scope
        ):
            live = await self.vote_repository.tally(voteable, scope)
            cached = await self.counter_repository.get(voteable, scope)
            if cached == live or (cached is None and live.total_count == 0):
                return False

            logfire.warn(
                "Vote counter mismatch repaired",
                voteable=str(voteable),
                scope=scope,
                cached=cached.model_dump() if cached else None,
                live=live.model_dump(),
            )
            await self.counter_repository.reset(voteable, scope, live)
            return True
