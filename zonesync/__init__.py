"""Zonesync: reconcile planned DNS changes into Sakura Cloud DNS zones.

Import :func:`new_provider` to build a provider from an explicit config,
or :func:`provider_from_env` to read credentials from the environment::

    from zonesync import DomainFilter, provider_from_env

    provider = provider_from_env(DomainFilter(["example.com"]), dry_run=True)
"""

from .base import (
    ProviderBlueprint,
    Changes,
    Endpoint,
    DomainFilter,
)
from .factory import new_provider, provider_from_env

__all__ = [
    "ProviderBlueprint",
    "Changes",
    "Endpoint",
    "DomainFilter",
    "new_provider",
    "provider_from_env",
]
