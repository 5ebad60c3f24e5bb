"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .container import TEST_JWT_SECRET, build_test_container, make_test_settings

__all__ = [
    "MockPersistenceProvider",
    "TEST_JWT_SECRET",
    "build_test_container",
    "make_test_settings",
]
