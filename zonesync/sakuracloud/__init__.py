"""Sakura Cloud DNS provider.

Exposes :class:`SakuraCloudProvider` and its API client.
"""

from .client import DNSClient
from .provider import SakuraCloudProvider

__all__ = ["DNSClient", "SakuraCloudProvider"]
