"""Provider construction.

:func:`new_provider` builds a provider from an explicit config and is the
only supported constructor. :func:`provider_from_env` is the bootstrap
wrapper that reads credentials from the process environment first.
"""

from __future__ import annotations

from typing import Mapping

from zonesync.base.config import SakuraCloudConfig, validate_config
from zonesync.base.domain_filter import DomainFilter
from zonesync.sakuracloud.client import DNSClient
from zonesync.sakuracloud.provider import SakuraCloudProvider


def new_provider(
    domain_filter: DomainFilter | None,
    dry_run: bool,
    config: SakuraCloudConfig | dict | None = None,
) -> SakuraCloudProvider:
    """
    Create a Sakura Cloud DNS provider.
    Args:
        domain_filter: Selects the managed zones; ``None`` manages all.
        dry_run: Compute changes without committing them.
        config: Provider config model or raw dict.
    Returns:
        A ready :class:`SakuraCloudProvider`.
    Raises:
        MissingCredentialError: If the token or secret is missing.
        pydantic.ValidationError: If the config is invalid.
    """
    config_obj = validate_config(config).require_credentials()
    return SakuraCloudProvider(DNSClient(config_obj), domain_filter, dry_run)


def provider_from_env(
    domain_filter: DomainFilter | None,
    dry_run: bool,
    environ: Mapping[str, str] | None = None,
) -> SakuraCloudProvider:
    """Create a provider with credentials taken from the environment."""
    return new_provider(domain_filter, dry_run, SakuraCloudConfig.from_env(environ))
