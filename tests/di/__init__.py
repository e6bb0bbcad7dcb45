"""Mock providers for testing."""

from .mailer import MockMailerProvider
from .persistence import MockPersistenceProvider
from .xsolla import MockXsollaProvider
from .container import build_test_container

__all__ = [
    "MockMailerProvider",
    "MockPersistenceProvider",
    "MockXsollaProvider",
    "build_test_container",
]
