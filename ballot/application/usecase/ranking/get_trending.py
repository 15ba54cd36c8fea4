"""Get trending use case."""

from datetime import timedelta

from pydantic import BaseModel, Field

from ballot.domain.model.common import utcnow
from ballot.domain.service import TallyService


class GetTrendingRequest(BaseModel):
    """Get trending request."""

    voteable_type: str
    hours: int = Field(default=24, gt=0)
    limit: int = Field(default=10, gt=0)


class GetTrendingResponse(BaseModel):
    """Ids of the most voted items in the window, most votes first."""

    voteable_ids: list[str]


class GetTrendingUseCase:
    """Use case for listing items that received the most votes recently."""

    def __init__(self, tally_service: TallyService) -> None:
        self.tally_service = tally_service

    async def execute(self, request: GetTrendingRequest) -> GetTrendingResponse:
        since = utcnow() - timedelta(hours=request.hours)
        trending = await self.tally_service.trending(request.voteable_type, since)
        return GetTrendingResponse(
            voteable_ids=[ref.id for ref in trending[: request.limit]]
        )
