"""Rank voteables use case."""

from datetime import datetime

from pydantic import BaseModel

from ballot.domain.service import TallyService
from ballot.domain.value import RankingAlgorithm, Voteable


class RankItem(BaseModel):
    """An item to rank."""

    id: str
    created_at: datetime | None = None


class RankedItem(BaseModel):
    """An item with its score."""

    id: str
    score: float


class RankVoteablesRequest(BaseModel):
    """Rank voteables request."""

    voteable_type: str
    items: list[RankItem]
    algorithm: RankingAlgorithm | None = None  # Configured default when omitted
    limit: int | None = None


class RankVoteablesResponse(BaseModel):
    """Rank voteables response, best first."""

    algorithm: RankingAlgorithm
    items: list[RankedItem]


class RankVoteablesUseCase:
    """Use case for ordering a set of voteables by a ranking algorithm."""

    def __init__(self, tally_service: TallyService) -> None:
        """Initialize rank voteables use case.

        Args:
            tally_service: Tally domain service
        """
        self.tally_service = tally_service

    async def execute(self, request: RankVoteablesRequest) -> RankVoteablesResponse:
        algorithm = request.algorithm or self.tally_service.settings.default_ranking
        voteables = [
            Voteable(type=request.voteable_type, id=item.id, created_at=item.created_at)
            for item in request.items
        ]

        ranked = await self.tally_service.rank(voteables, algorithm)
        if request.limit is not None:
            ranked = ranked[: request.limit]

        return RankVoteablesResponse(
            algorithm=algorithm,
            items=[RankedItem(id=voteable.id, score=score) for voteable, score in ranked],
        )
