"""Vote statistics use cases."""

from .get_vote_stats import (
    GetVoteStatsRequest,
    GetVoteStatsResponse,
    GetVoteStatsUseCase,
)

__all__ = [
    "GetVoteStatsRequest",
    "GetVoteStatsResponse",
    "GetVoteStatsUseCase",
]
