"""Conversion between endpoints and Sakura Cloud DNS records."""

from __future__ import annotations

from zonesync.base.endpoint import Endpoint
from zonesync.sakuracloud.models import APEX_MARKER, DEFAULT_RECORD_TTL, DNSRecord, DNSZone


def stripped_record_name(zone: DNSZone, endpoint: Endpoint) -> str:
    """Return the endpoint name relative to *zone*.

    The zone apex maps to :data:`APEX_MARKER`. A name outside the zone is
    returned unchanged.
    """
    if endpoint.dns_name == zone.name:
        return APEX_MARKER
    suffix = "." + zone.name
    if endpoint.dns_name.endswith(suffix):
        return endpoint.dns_name[: -len(suffix)]
    return endpoint.dns_name


def _unquote(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def endpoint_to_records(zone: DNSZone, endpoint: Endpoint) -> list[DNSRecord]:
    """Translate one endpoint into one record per target.

    Args:
        zone: Zone the records will belong to.
        endpoint: Desired endpoint.

    Returns:
        Records sharing type, relative name and TTL, in target order.
    """
    ttl = endpoint.record_ttl if endpoint.is_ttl_configured else DEFAULT_RECORD_TTL
    name = stripped_record_name(zone, endpoint)
    return [
        DNSRecord(type=endpoint.record_type, name=name, rdata=_unquote(target), ttl=ttl)
        for target in endpoint.targets
    ]


def record_to_endpoint(zone: DNSZone, record: DNSRecord) -> Endpoint:
    """Translate a stored record back into a fully-qualified endpoint."""
    name = zone.name if record.name == APEX_MARKER else f"{record.name}.{zone.name}"
    return Endpoint.with_ttl(name, record.type, record.ttl, record.rdata)
