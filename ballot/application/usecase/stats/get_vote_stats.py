"""Get vote stats use case."""

from pydantic import BaseModel

from ballot.domain.model import VoteSnapshot
from ballot.domain.service import TallyService, VoteService
from ballot.domain.value import EntityRef, VoteDirection


class GetVoteStatsRequest(BaseModel):
    """Get vote stats request.

    Pass a voter to also learn how that voter voted.
    """

    voteable_type: str
    voteable_id: str
    scope: str | None = None
    voter_type: str | None = None
    voter_id: str | None = None

    def model_post_init(self, __context):
        """Validate that voter type and id come together."""
        if (self.voter_type is None) != (self.voter_id is None):
            raise ValueError("voter_type and voter_id must be provided together")


class GetVoteStatsResponse(BaseModel):
    """Get vote stats response."""

    snapshot: VoteSnapshot
    voter_value: int | None = None
    voter_direction: VoteDirection | None = None


class GetVoteStatsUseCase:
    """Use case for reading the aggregates of one voteable."""

    def __init__(self, tally_service: TallyService, vote_service: VoteService) -> None:
        """Initialize get vote stats use case.

        Args:
            tally_service: Tally domain service
            vote_service: Vote domain service
        """
        self.tally_service = tally_service
        self.vote_service = vote_service

    async def execute(self, request: GetVoteStatsRequest) -> GetVoteStatsResponse:
        voteable = EntityRef(type=request.voteable_type, id=request.voteable_id)
        snapshot = await self.tally_service.snapshot(voteable, request.scope)

        if request.voter_type is None or request.voter_id is None:
            return GetVoteStatsResponse(snapshot=snapshot)

        voter = EntityRef(type=request.voter_type, id=request.voter_id)
        vote = await self.vote_service.find_vote(voter, voteable, request.scope)
        return GetVoteStatsResponse(
            snapshot=snapshot,
            voter_value=vote.value if vote else None,
            voter_direction=vote.direction if vote else None,
        )
