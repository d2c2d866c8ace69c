"""Mock providers for testing."""

from .apple import MockAppleProvider
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider
from .session import MockSessionProvider
from .container import build_test_container

__all__ = [
    "MockAppleProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "MockSessionProvider",
    "build_test_container",
]
