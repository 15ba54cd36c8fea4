"""Get karma use case."""

import logfire
from pydantic import BaseModel

from ballot.application.usecase.base import BaseUseCase
from ballot.domain.model import KarmaBreakdown, KarmaProgress
from ballot.domain.service import KarmaService
from ballot.domain.value import EntityRef


class GetKarmaRequest(BaseModel):
    """Get karma request."""

    voter_type: str
    voter_id: str
    recompute: bool = False  # Refresh the cached value from the ledger


class GetKarmaResponse(BaseModel):
    """Get karma response."""

    karma: int
    level: str
    progress: KarmaProgress
    breakdown: list[KarmaBreakdown]


class GetKarmaUseCase(BaseUseCase):
    """Use case for a voter's karma profile."""

    def __init__(self, karma_service: KarmaService) -> None:
        """Initialize get karma use case.

        Args:
            karma_service: Karma domain service
        """
        self.karma_service = karma_service

    async def execute(self, request: GetKarmaRequest) -> GetKarmaResponse:
        """Execute get karma flow.

        Args:
            request: Get karma request

        Returns:
            Karma total, level, progress to the next level and per-source breakdown
        """
        voter = EntityRef(type=request.voter_type, id=request.voter_id)

        with logfire.span("get_karma", voter=str(voter), recompute=request.recompute):
            if request.recompute:
                karma = await self.karma_service.recompute_karma(voter)
            else:
                karma = await self.karma_service.karma(voter)

            return GetKarmaResponse(
                karma=karma,
                level=await self.karma_service.karma_level(voter),
                progress=await self.karma_service.karma_progress(voter),
                breakdown=await self.karma_service.karma_breakdown(voter),
            )
