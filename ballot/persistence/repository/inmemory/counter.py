"""In-memory counter repository for testing."""

from typing import Optional

from ballot.domain.model import TallyDelta, VoteTally
from ballot.domain.repository.counter import CounterRepository
from ballot.domain.value import EntityRef, normalize_scope

CounterKey = tuple[str, str, str | None]


class InMemoryCounterRepository(CounterRepository):
    """In-memory implementation of CounterRepository for testing."""

    def __init__(self) -> None:
        self._counters: dict[CounterKey, VoteTally] = {}

    @staticmethod
    def _key(voteable: EntityRef, scope: str | None) -> CounterKey:
        return (voteable.type, voteable.id, normalize_scope(scope))

    async def get(self, voteable: EntityRef, scope: str | None) -> Optional[VoteTally]:
        return self._counters.get(self._key(voteable, scope))

    async def get_all_scopes(self, voteable: EntityRef) -> Optional[VoteTally]:
        rows = [
            tally
            for (voteable_type, voteable_id, _), tally in self._counters.items()
            if voteable_type == voteable.type and voteable_id == voteable.id
        ]
        if not rows:
            return None
        return sum(rows, VoteTally())

    async def apply(
        self, voteable: EntityRef, scope: str | None, delta: TallyDelta
    ) -> None:
        key = self._key(voteable, scope)
        self._counters[key] = self._counters.get(key, VoteTally()).apply(delta)

    async def seed(
        self,
        voteable: EntityRef,
        scope: str | None,
        tally: VoteTally,
        delta: TallyDelta | None = None,
    ) -> None:
        key = self._key(voteable, scope)
        if key not in self._counters:
            self._counters[key] = tally
        elif delta is not None:
            self._counters[key] = self._counters[key].apply(delta)

    async def reset(
        self, voteable: EntityRef, scope: str | None, tally: VoteTally
    ) -> None:
        self._counters[self._key(voteable, scope)] = tally
