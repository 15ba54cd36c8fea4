"""Counter cache repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ballot.domain.model import TallyDelta, VoteTally
from ballot.domain.value import EntityRef


class CounterRepository(ABC):
    """Storage for cached vote counters, one row per (voteable, scope).

    ``apply`` must be atomic at the storage layer (increment in place, never
    read-then-write) and must run in the same unit of work as the ledger
    mutation that produced the delta.
    """

    @abstractmethod
    async def get(self, voteable: EntityRef, scope: str | None) -> Optional[VoteTally]:
        """Cached tally, or None when no row exists."""
        pass

    @abstractmethod
    async def get_all_scopes(self, voteable: EntityRef) -> Optional[VoteTally]:
        """Sum of the cached tallies of every scope of an item.

        Returns:
            The summed tally, or None when the item has no counter rows
        """
        pass

    @abstractmethod
    async def apply(
        self, voteable: EntityRef, scope: str | None, delta: TallyDelta
    ) -> None:
        """Atomically add a delta, creating the row if needed."""
        pass

    @abstractmethod
    async def seed(
        self,
        voteable: EntityRef,
        scope: str | None,
        tally: VoteTally,
        delta: TallyDelta | None = None,
    ) -> None:
        """Create a missing row from a ledger tally.

        If the row was created concurrently, ``delta`` is added to it instead
        (nothing is written when ``delta`` is None).
        """
        pass

    @abstractmethod
    async def reset(
        self, voteable: EntityRef, scope: str | None, tally: VoteTally
    ) -> None:
        """Overwrite the cached row with a recomputed tally."""
        pass
