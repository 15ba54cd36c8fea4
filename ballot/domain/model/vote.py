"""Vote entity.

A vote is the atomic unit of the ledger: one signed integer cast by a voter
on a voteable, optionally inside a named scope.
"""

from datetime import datetime

from pydantic import Field, field_validator

from ballot.domain.model.common import DomainModel, utcnow
from ballot.domain.value import EntityRef, VoteDirection, VoteId, normalize_scope


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per voteable per scope (unless duplicates are allowed)
    - ``None`` scope is its own partition; an empty scope is stored as ``None``
    - Only ``value`` changes after creation (recast)
    """

    id: VoteId
    voter_type: str
    voter_id: str
    voteable_type: str
    voteable_id: str
    value: int
    scope: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("scope")
    @classmethod
    def normalize_empty_scope(cls, v: str | None) -> str | None:
        return normalize_scope(v)

    @property
    def voter(self) -> EntityRef:
        return EntityRef(type=self.voter_type, id=self.voter_id)

    @property
    def voteable(self) -> EntityRef:
        return EntityRef(type=self.voteable_type, id=self.voteable_id)

    @property
    def direction(self) -> VoteDirection:
        return VoteDirection.of(self.value)

    @property
    def is_up(self) -> bool:
        return self.value > 0

    @property
    def is_down(self) -> bool:
        return self.value < 0

    def matches(
        self, voter: EntityRef, voteable: EntityRef, scope: str | None
    ) -> bool:
        """Whether this vote belongs to the (voter, voteable, scope) key."""
        return (
            self.voter_type == voter.type
            and self.voter_id == voter.id
            and self.voteable_type == voteable.type
            and self.voteable_id == voteable.id
            and self.scope == normalize_scope(scope)
        )

    def recast(self, value: int) -> "Vote":
        """Return the same vote carrying a new value."""
        return self.model_copy(update={"value": value, "updated_at": utcnow()})
