"""Remove vote use case."""

from pydantic import BaseModel

from ballot.domain.service import VoteService
from ballot.domain.value import EntityRef


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    voter_type: str
    voter_id: str
    voteable_type: str
    voteable_id: str
    scope: str | None = None


class RemoveVoteResponse(BaseModel):
    """Remove vote response."""

    success: bool
    message: str


class RemoveVoteUseCase:
    """Use case for removing a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Execute remove vote flow.

        Removing a vote that does not exist is not an error.
        """
        voter = EntityRef(type=request.voter_type, id=request.voter_id)
        voteable = EntityRef(type=request.voteable_type, id=request.voteable_id)

        removed = await self.vote_service.remove_vote(voter, voteable, request.scope)

        if removed:
            return RemoveVoteResponse(
                success=True,
                message="Vote removed successfully",
            )
        else:
            return RemoveVoteResponse(
                success=False,
                message="No vote found to remove",
            )
