"""Strongly typed identifiers for ballot domain entities.

Voters and voteables belong to the host application, so they are referenced
by an ``EntityRef`` (type tag + id) rather than by a typed UUID.
"""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import field_validator

from ballot.domain.value.common import ValueObject

VoteId = NewType("VoteId", UUID)


class EntityRef(ValueObject):
    """Polymorphic reference to a voter or voteable.

    Identity is the (type, id) pair. Integer or UUID ids from the host
    application are normalized to strings.
    """

    type: str
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        """Accept ints and UUIDs as ids."""
        return str(v)

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate type tag is not empty."""
        if not v:
            raise ValueError("Entity type must not be empty")
        return v

    @property
    def key(self) -> tuple[str, str]:
        """The (type, id) identity pair."""
        return (self.type, self.id)

    def same_entity(self, other: "EntityRef") -> bool:
        """Whether both refs point at the same entity, ignoring extra fields."""
        return self.key == other.key

    def __str__(self) -> str:
        return f"{self.type}:{self.id}"


class Voteable(EntityRef):
    """A voteable reference carrying the creation time used by age-based ranking."""

    created_at: datetime | None = None
