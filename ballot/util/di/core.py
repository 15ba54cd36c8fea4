"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from ballot.config import KarmaSettings, Settings, VotingSettings
from ballot.util.di.base import ProviderBase
from ballot.util.error import ConfigurationError


def validate_karma_settings(karma: KarmaSettings) -> None:
    """Reject karma configurations that cannot be evaluated unambiguously.

    Raises:
        ConfigurationError: On duplicate source names or level labels per voter type
    """
    for voter_type, sources in karma.sources.items():
        names = [source.name for source in sources]
        if len(names) != len(set(names)):
            raise ConfigurationError(
                f"Duplicate karma source names for voter type '{voter_type}'"
            )
    for voter_type, levels in karma.levels.items():
        labels = [level.label for level in levels]
        if len(labels) != len(set(labels)):
            raise ConfigurationError(
                f"Duplicate karma level labels for voter type '{voter_type}'"
            )


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        """Provide voting settings."""
        return settings.voting

    @provide(scope=Scope.APP)
    def provide_karma_settings(self, settings: Settings) -> KarmaSettings:
        """Provide karma settings."""
        validate_karma_settings(settings.karma)
        return settings.karma
