"""Karma configuration and result models."""

from typing import Any

from pydantic import Field, model_validator

from ballot.domain.model.common import DomainModel


class KarmaDecay(DomainModel):
    """Exponential time decay applied to each vote of a karma source."""

    half_life_days: float = Field(default=90.0, gt=0)
    floor: float = Field(default=0.1, ge=0, le=1)


class KarmaSource(DomainModel):
    """Binds a voter-owned collection of voteables to karma computation.

    ``weight`` may be given instead of the explicit weights, either as a
    single number (positive weight only) or as ``[positive, negative]``.
    """

    name: str
    voteable_type: str
    foreign_key: str
    positive_weight: float = 1.0
    negative_weight: float = 0.0
    decay: KarmaDecay | None = None
    # None counts votes in every scope
    scope: str | None = None
    # Table holding the owned items, defaults to "<voteable_type>s"
    table_name: str | None = None

    @property
    def owner_table(self) -> str:
        return self.table_name or f"{self.voteable_type}s"

    @model_validator(mode="before")
    @classmethod
    def expand_weight(cls, data: Any) -> Any:
        """Expand the ``weight`` shorthand into explicit weights."""
        if not isinstance(data, dict) or "weight" not in data:
            return data
        data = dict(data)
        weight = data.pop("weight")
        weights = list(weight) if isinstance(weight, (list, tuple)) else [weight]
        data["positive_weight"] = float(weights[0])
        data["negative_weight"] = float(weights[1]) if len(weights) > 1 else 0.0
        return data


class KarmaLevel(DomainModel):
    """A karma threshold and the label reached at or above it."""

    threshold: int = Field(ge=0)
    label: str


class KarmaBreakdown(DomainModel):
    """Karma contributed by one source."""

    source: str
    value: int
    recent_value: int


class KarmaProgress(DomainModel):
    """Progress from the current karma level towards the next one."""

    current_level: str
    next_level: str | None
    progress_percent: float
    karma_needed: int
