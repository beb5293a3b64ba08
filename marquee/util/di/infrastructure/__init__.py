"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .push import PushProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .push import ProdPushProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdPushProvider",
    "PushProvider",
]
