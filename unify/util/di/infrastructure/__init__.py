"""Infrastructure providers."""

# Import bases
from .apple import AppleProvider
from .google import GoogleProvider
from .persistence import PersistenceProvider
from .session import SessionProvider
from .verifier import VerifierAggregatorProvider

# Import implementations (needed for __subclasses__())
from .apple import ProdAppleProvider  # noqa: F401
from .google import ProdGoogleProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .session import ProdSessionProvider  # noqa: F401

__all__ = [
    "AppleProvider",
    "GoogleProvider",
    "PersistenceProvider",
    "ProdAppleProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
    "ProdSessionProvider",
    "SessionProvider",
    "VerifierAggregatorProvider",
]
