"""Dependency injection module.

Mock implementations register themselves by subclassing a component's
provider, so tests/di must be imported before a test container is built.
"""

from typing import Type

from sso.util.di.application import ProdApplicationProvider
from sso.util.di.base import Component, ProviderBase
from sso.util.di.core import ProdConfigProvider
from sso.util.di.domain import ProdDomainProvider
from sso.util.di.infrastructure import (
    MailerProvider,
    PersistenceProvider,
    ProdMailerProvider,
    ProdPersistenceProvider,
    ProdXsollaProvider,
    XsollaProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    XsollaProvider,
    MailerProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider class to the implementation to instantiate."""
    return base.implementation(use_mock)


def mockable_components() -> set[Component]:
    """Names of all components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_mockable() and base.__mock_component__
    }


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "MailerProvider",
    "PersistenceProvider",
    "XsollaProvider",
    "ProdMailerProvider",
    "ProdPersistenceProvider",
    "ProdXsollaProvider",
]
