"""Dependency injection module.

Providers are grouped by layer. A provider base with subclasses is a
swappable component: tests pick its ``__is_mock__`` implementation, the
application picks the production one.
"""

from typing import Type

from vibe.util.di.adapter import AdapterProvider
from vibe.util.di.application import ProdApplicationProvider
from vibe.util.di.base import Component, ProviderBase
from vibe.util.di.core import ProdConfigProvider
from vibe.util.di.domain import ProdDomainProvider
from vibe.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    AdapterProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable: in-memory repositories in tests, PostgreSQL otherwise
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Select the provider class to instantiate for ``base``.

    Raises:
        ValueError: If the swappable component has no implementation of the
            requested kind (e.g. the mock is not imported)
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise ValueError(f"No {kind} implementation for {component}")


__all__ = [
    "AdapterProvider",
    "Component",
    "PersistenceProvider",
    "PROVIDERS",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
