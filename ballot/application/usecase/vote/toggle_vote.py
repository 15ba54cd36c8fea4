"""Toggle vote use case."""

from pydantic import BaseModel

from ballot.domain.service import VoteService
from ballot.domain.value import EntityRef


class ToggleVoteRequest(BaseModel):
    """Toggle vote request."""

    voter_type: str
    voter_id: str
    voteable_type: str
    voteable_id: str
    scope: str | None = None


class ToggleVoteResponse(BaseModel):
    """Toggle vote response."""

    voted: bool  # True if an upvote now exists, False if the vote was removed
    vote_id: str | None = None


class ToggleVoteUseCase:
    """Use case for flipping a voter between "upvoted" and "not voted"."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: ToggleVoteRequest) -> ToggleVoteResponse:
        voter = EntityRef(type=request.voter_type, id=request.voter_id)
        voteable = EntityRef(type=request.voteable_type, id=request.voteable_id)

        vote = await self.vote_service.toggle_vote(voter, voteable, request.scope)
        if vote is None:
            return ToggleVoteResponse(voted=False)
        return ToggleVoteResponse(voted=True, vote_id=str(vote.id))
