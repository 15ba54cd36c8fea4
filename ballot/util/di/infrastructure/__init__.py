"""Infrastructure providers."""

# Import bases
from .broadcast import BroadcastProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .broadcast import ProdBroadcastProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "BroadcastProvider",
    "PersistenceProvider",
    "ProdBroadcastProvider",
    "ProdPersistenceProvider",
]
