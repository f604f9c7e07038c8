"""
Zonesync exception hierarchy.

Every failure raised by the adapter inherits from :class:`ZonesyncError`.
Construction problems are :class:`ConfigurationError`; anything that goes
wrong while talking to the DNS provider is a :class:`ProviderError`.
"""


# ── Base ──────────────────────────────────────────────────────────────
class ZonesyncError(Exception):
    """Root exception for all Zonesync errors."""


# ── Configuration ─────────────────────────────────────────────────────
class ConfigurationError(ZonesyncError):
    """Base exception for invalid or incomplete provider configuration."""


class MissingCredentialError(ConfigurationError):
    """A required API credential was not supplied."""


# ── Provider ──────────────────────────────────────────────────────────
class ProviderError(ZonesyncError):
    """Base exception for DNS provider operations."""


class ProviderUnavailableError(ProviderError):
    """A listing or update call to the provider failed."""


# ── Zones ─────────────────────────────────────────────────────────────
class ZoneError(ProviderUnavailableError):
    """Base exception for zone-level provider failures."""


class ZoneNotFoundError(ZoneError):
    """DNS zone not found."""
