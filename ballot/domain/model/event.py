"""Vote events emitted after ledger mutations."""

from datetime import datetime

from pydantic import Field

from ballot.domain.model.common import DomainModel, utcnow
from ballot.domain.model.vote import Vote
from ballot.domain.value import VoteAction


class VoteSnapshot(DomainModel):
    """Aggregate state of a (voteable, scope) right after a mutation."""

    voteable_type: str
    voteable_id: str
    scope: str | None = None
    votes_for: int
    votes_against: int
    votes_total: int
    votes_count: int
    plusminus: int
    percent_for: float
    percent_against: float
    wilson_score: float


class VoteEvent(DomainModel):
    """A vote was created, updated or removed."""

    action: VoteAction
    vote: Vote
    snapshot: VoteSnapshot
    occurred_at: datetime = Field(default_factory=utcnow)
