"""Ranking use cases."""

from .get_trending import GetTrendingRequest, GetTrendingResponse, GetTrendingUseCase
from .rank_voteables import (
    RankedItem,
    RankItem,
    RankVoteablesRequest,
    RankVoteablesResponse,
    RankVoteablesUseCase,
)

__all__ = [
    "GetTrendingRequest",
    "GetTrendingResponse",
    "GetTrendingUseCase",
    "RankItem",
    "RankedItem",
    "RankVoteablesRequest",
    "RankVoteablesResponse",
    "RankVoteablesUseCase",
]
