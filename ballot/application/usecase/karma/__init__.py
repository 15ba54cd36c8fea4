"""Karma use cases."""

from .get_karma import GetKarmaRequest, GetKarmaResponse, GetKarmaUseCase

__all__ = [
    "GetKarmaRequest",
    "GetKarmaResponse",
    "GetKarmaUseCase",
]
