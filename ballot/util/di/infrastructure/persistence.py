"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ballot.config import Settings
from ballot.domain.repository import (
    CounterRepository,
    KarmaCacheRepository,
    OwnershipRepository,
    VoteRepository,
)
from ballot.persistence.database import create_engine, create_session_factory
from ballot.persistence.repository import (
    PostgresCounterRepository,
    PostgresKarmaCacheRepository,
    PostgresOwnershipRepository,
    PostgresVoteRepository,
)
from ballot.util.di.base import ProviderBase
from ballot.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed when the scope closes without an exception,
        so a vote, its counter update and its karma writes land atomically.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_counter_repository(self, session: AsyncSession) -> CounterRepository:
        """Provide counter cache repository."""
        return PostgresCounterRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_ownership_repository(self, session: AsyncSession) -> OwnershipRepository:
        """Provide ownership lookup repository."""
        return PostgresOwnershipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_karma_cache_repository(
        self, session: AsyncSession
    ) -> KarmaCacheRepository:
        """Provide karma cache repository."""
        return PostgresKarmaCacheRepository(session)
