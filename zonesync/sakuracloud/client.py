"""HTTP client for the Sakura Cloud DNS API."""

from __future__ import annotations

import json
from typing import Any, Iterable, NoReturn

import httpx
from pydantic import ValidationError

from zonesync.base.config import SakuraCloudConfig
from zonesync.base.exceptions import (
    ProviderUnavailableError,
    ZoneNotFoundError,
)
from zonesync.sakuracloud.models import DNSRecord, DNSZone

_ERROR_MAP: dict[int, type[ProviderUnavailableError]] = {
    404: ZoneNotFoundError,
}

_DNS_FILTER = {"Provider.Class": "dns"}

# Raised while decoding a 2xx body that is not the expected JSON shape
_PARSE_ERRORS: tuple[type[Exception], ...] = (
    ValidationError,
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
)


def _handle(e: Exception, msg: str) -> NoReturn:
    exc: type[ProviderUnavailableError] = ProviderUnavailableError
    if isinstance(e, httpx.HTTPStatusError):
        exc = _ERROR_MAP.get(e.response.status_code, ProviderUnavailableError)
    raise exc(f"{msg}: {e}") from e


class DNSClient:
    """Sakura Cloud DNS operations (zone listing and zone update).

    Attributes:
        config: Validated provider configuration.
    """

    def __init__(self, config: SakuraCloudConfig) -> None:
        """Store the configuration; the HTTP session is opened on first use.

        Args:
            config: Provider config with both credential halves set.
        """
        self.config = config
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.base_url,
                auth=(self.config.access_token or "", self.config.access_token_secret or ""),
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.config.user_agent,
                },
                timeout=self.config.timeout,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> DNSClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def find(self, condition: dict[str, Any] | None = None) -> list[DNSZone]:
        """List DNS zones.

        Args:
            condition: Extra ``FindCondition`` keys (``Filter``, ``Count``,
                ``From``, ``Sort``). ``None`` lists every zone.

        Returns:
            Zones with their current records.

        Raises:
            ProviderUnavailableError: On API failure.
        """
        query: dict[str, Any] = dict(condition or {})
        query["Filter"] = {**(query.get("Filter") or {}), **_DNS_FILTER}
        try:
            resp = self.client.get("/commonserviceitem", params={"q": json.dumps(query)})
            resp.raise_for_status()
            items = resp.json().get("CommonServiceItems") or []
            return [DNSZone.from_api(item) for item in items]
        except (httpx.HTTPError, *_PARSE_ERRORS) as e:
            _handle(e, "Failed to list DNS zones")

    def update(self, zone_id: str, records: Iterable[DNSRecord]) -> None:
        """Replace the full record set of a zone.

        Args:
            zone_id: Zone identifier.
            records: Every record the zone should hold afterwards.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            ProviderUnavailableError: On any other API failure.
        """
        body = {
            "CommonServiceItem": {
                "Settings": {
                    "DNS": {"ResourceRecordSets": [r.to_api() for r in records]}
                }
            }
        }
        try:
            resp = self.client.put(f"/commonserviceitem/{zone_id}", json=body)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            _handle(e, f"Failed to update DNS zone '{zone_id}'")
