"""Vote aggregates.

``VoteTally`` is the read projection of the ledger for one voteable (and
scope). ``TallyDelta`` is the signed increment a single ledger mutation
applies to a cached tally.
"""

from ballot.domain.model.common import DomainModel


def _is_up(value: int) -> int:
    return 1 if value > 0 else 0


def _is_down(value: int) -> int:
    return 1 if value < 0 else 0


class TallyDelta(DomainModel):
    """Counter increments produced by one ledger mutation."""

    count: int = 0
    total: int = 0
    up: int = 0
    down: int = 0

    @classmethod
    def for_create(cls, value: int) -> "TallyDelta":
        return cls(count=1, total=value, up=_is_up(value), down=_is_down(value))

    @classmethod
    def for_update(cls, old_value: int, new_value: int) -> "TallyDelta":
        """Delta for a recast; up/down move only when the sign class changes."""
        return cls(
            count=0,
            total=new_value - old_value,
            up=_is_up(new_value) - _is_up(old_value),
            down=_is_down(new_value) - _is_down(old_value),
        )

    @classmethod
    def for_delete(cls, value: int) -> "TallyDelta":
        return cls(count=-1, total=-value, up=-_is_up(value), down=-_is_down(value))

    @property
    def is_zero(self) -> bool:
        return not (self.count or self.total or self.up or self.down)


class VoteTally(DomainModel):
    """Aggregate vote counters for a voteable."""

    total_count: int = 0
    total_value: int = 0
    positive_count: int = 0
    negative_count: int = 0

    @classmethod
    def from_values(cls, values: list[int]) -> "VoteTally":
        """Recompute a tally from raw vote values."""
        return cls(
            total_count=len(values),
            total_value=sum(values),
            positive_count=sum(_is_up(v) for v in values),
            negative_count=sum(_is_down(v) for v in values),
        )

    def apply(self, delta: TallyDelta) -> "VoteTally":
        return VoteTally(
            total_count=self.total_count + delta.count,
            total_value=self.total_value + delta.total,
            positive_count=self.positive_count + delta.up,
            negative_count=self.negative_count + delta.down,
        )

    def __add__(self, other: "VoteTally") -> "VoteTally":
        return VoteTally(
            total_count=self.total_count + other.total_count,
            total_value=self.total_value + other.total_value,
            positive_count=self.positive_count + other.positive_count,
            negative_count=self.negative_count + other.negative_count,
        )

    @property
    def plusminus(self) -> int:
        """Net score: the sum of signed vote values."""
        return self.total_value

    @property
    def percent_for(self) -> float:
        if self.total_count == 0:
            return 0.0
        return round(self.positive_count / self.total_count * 100, 1)

    @property
    def percent_against(self) -> float:
        if self.total_count == 0:
            return 0.0
        return round(self.negative_count / self.total_count * 100, 1)
