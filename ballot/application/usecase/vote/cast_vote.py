"""Cast vote use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from ballot.application.usecase.base import BaseUseCase
from ballot.domain.model import VoteSnapshot
from ballot.domain.service import TallyService, VoteService
from ballot.domain.value import EntityRef, VoteDirection


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    voter_type: str
    voter_id: str
    voteable_type: str
    voteable_id: str
    # Signed integer, the sign gives the direction. Passed through unchanged:
    # non-integers (bool, float, str) are rejected by the vote service
    value: Any = 1
    scope: str | None = None


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    vote_id: str
    value: int
    direction: VoteDirection
    scope: str | None
    created_at: datetime
    updated_at: datetime
    snapshot: VoteSnapshot


class CastVoteUseCase(BaseUseCase):
    """Use case for casting (or recasting) a vote on any voteable."""

    def __init__(self, vote_service: VoteService, tally_service: TallyService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            tally_service: Tally domain service
        """
        self.vote_service = vote_service
        self.tally_service = tally_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The vote and the aggregates after it was applied

        Raises:
            InvalidVoteValueError: If value is not an integer
            VoteError: If the vote is rejected
        """
        voter = EntityRef(type=request.voter_type, id=request.voter_id)
        voteable = EntityRef(type=request.voteable_type, id=request.voteable_id)

        vote = await self.vote_service.cast_vote(
            voter, voteable, request.value, request.scope
        )
        snapshot = await self.tally_service.snapshot(voteable, request.scope)

        return CastVoteResponse(
            vote_id=str(vote.id),
            value=vote.value,
            direction=vote.direction,
            scope=vote.scope,
            created_at=vote.created_at,
            updated_at=vote.updated_at,
            snapshot=snapshot,
        )
