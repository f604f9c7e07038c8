"""Sakura Cloud implementation of the provider blueprint."""

from __future__ import annotations

from typing import Iterable

from zonesync.base.domain_filter import DomainFilter
from zonesync.base.endpoint import Changes, Endpoint, supported_record_type
from zonesync.base.exceptions import ProviderUnavailableError
from zonesync.base.logger import CycleLogger, zs_logger
from zonesync.base.provider import ProviderBlueprint
from zonesync.sakuracloud.client import DNSClient
from zonesync.sakuracloud.models import DNSZone, RecordSet
from zonesync.sakuracloud.translator import endpoint_to_records, record_to_endpoint

PROVIDER_NAME = "sakuracloud"

CHANGE_CREATE = "Create"
CHANGE_UPDATE_NEW = "UpdateNew"
CHANGE_DELETE = "Delete"
CHANGE_UPDATE_OLD = "UpdateOld"


def zone_contains(zone: DNSZone, endpoint: Endpoint) -> bool:
    """Substring test: zone ``ple.com`` also holds ``www.example.com``."""
    return zone.name in endpoint.dns_name


class SakuraCloudProvider(ProviderBlueprint):
    """Reconciles change sets against Sakura Cloud DNS zones.

    Attributes:
        client: Sakura Cloud DNS API client.
        domain_filter: Selects which zones are managed.
        dry_run: When set, changes are computed and logged but never committed.
    """

    def __init__(
        self,
        client: DNSClient,
        domain_filter: DomainFilter | None = None,
        dry_run: bool = False,
    ) -> None:
        self.client = client
        self.domain_filter = domain_filter or DomainFilter()
        self.dry_run = dry_run

    # --- Read path ---

    def zones(self, log: CycleLogger | None = None) -> list[DNSZone]:
        """List every zone the domain filter accepts.

        Raises:
            ProviderUnavailableError: If the listing call fails.
        """
        log = log or zs_logger.cycle(PROVIDER_NAME)
        try:
            found = self.client.find()
        except ProviderUnavailableError as e:
            log.error(f"Zone listing failed: {e}")
            raise
        zones = [z for z in found if self.domain_filter.match(z.name)]
        log.debug(f"Listed {len(found)} zone(s), {len(zones)} managed")
        return zones

    def records(self) -> list[Endpoint]:
        """Return supported records of all managed zones as endpoints."""
        endpoints: list[Endpoint] = []
        for zone in self.zones():
            for record in zone.records:
                if supported_record_type(record.type):
                    endpoints.append(record_to_endpoint(zone, record))
        return endpoints

    # --- Write path ---

    @staticmethod
    def _add(
        log: CycleLogger,
        zone: DNSZone,
        records: RecordSet,
        endpoints: Iterable[Endpoint],
        change: str,
    ) -> tuple[RecordSet, set[tuple[str, str, str]]]:
        added: set[tuple[str, str, str]] = set()
        for ep in endpoints:
            if not zone_contains(zone, ep):
                continue
            for record in endpoint_to_records(zone, ep):
                log.debug(f"change.{change}: {record!r}", zone=zone.name, change=change)
                records = records.add(record)
                added.add(record.identity)
        return records, added

    @staticmethod
    def _remove(
        log: CycleLogger,
        zone: DNSZone,
        records: RecordSet,
        endpoints: Iterable[Endpoint],
        change: str,
        keep: set[tuple[str, str, str]] | None = None,
    ) -> tuple[RecordSet, set[tuple[str, str, str]]]:
        removed: set[tuple[str, str, str]] = set()
        for ep in endpoints:
            if not zone_contains(zone, ep):
                continue
            for record in endpoint_to_records(zone, ep):
                if keep and record.identity in keep:
                    log.debug(f"change.{change}: keeping {record!r}", zone=zone.name, change=change)
                    continue
                log.debug(f"change.{change}: {record!r}", zone=zone.name, change=change)
                records = records.remove(record)
                removed.add(record.identity)
        return records, removed

    def plan_zone(
        self, zone: DNSZone, changes: Changes, log: CycleLogger | None = None
    ) -> DNSZone | None:
        """Apply *changes* to a copy of *zone*.

        Passes run in order: create, update_new, delete, update_old. The
        update_old pass leaves alone any record the update_new pass put
        in place.

        Returns:
            The zone with its new record set, or ``None`` when no record
            was produced for it (no member endpoint, or only endpoints
            without targets).
        """
        log = log or zs_logger.cycle(PROVIDER_NAME)
        records = zone.record_set()
        records, created = self._add(log, zone, records, changes.create, CHANGE_CREATE)
        records, updated = self._add(log, zone, records, changes.update_new, CHANGE_UPDATE_NEW)
        records, deleted = self._remove(log, zone, records, changes.delete, CHANGE_DELETE)
        records, replaced = self._remove(
            log, zone, records, changes.update_old, CHANGE_UPDATE_OLD, keep=updated
        )
        if not (created or updated or deleted or replaced):
            return None
        log.debug(
            f"Planned {len(created)} create, {len(updated)} update_new, "
            f"{len(deleted)} delete, {len(replaced)} update_old record(s)",
            zone=zone.name,
        )
        return zone.model_copy(update={"records": tuple(records)})

    def apply_changes(self, changes: Changes | None) -> None:
        """Apply a change set and commit every touched zone.

        All records logged for one call share a ``cycle_id``.

        Args:
            changes: The diff to apply. ``None``, or a diff with nothing
                to create, update or delete, returns without any API call.

        Raises:
            ProviderUnavailableError: If listing or a commit fails. Zones
                committed before the failure stay committed.
        """
        if changes is None or not changes.has_changes():
            return

        log = zs_logger.cycle(PROVIDER_NAME)
        planned = [
            z for z in (self.plan_zone(zone, changes, log) for zone in self.zones(log))
            if z is not None
        ]

        if self.dry_run:
            for zone in planned:
                log.info(
                    f"Dry run: skipping update of zone '{zone.id}' ({len(zone.records)} records)",
                    zone=zone.name,
                )
            return

        for zone in planned:
            try:
                self.client.update(zone.id, zone.records)
            except ProviderUnavailableError as e:
                log.error(f"Update of zone '{zone.id}' failed: {e}", zone=zone.name)
                raise
            log.info(f"Updated zone '{zone.id}' ({len(zone.records)} records)", zone=zone.name)
