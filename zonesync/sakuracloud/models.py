"""Sakura Cloud DNS resource models.

A DNS zone is exposed by the API as a ``CommonServiceItem`` of provider
class ``dns``; its records live under ``Settings.DNS.ResourceRecordSets``.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from pydantic import BaseModel, ConfigDict

APEX_MARKER = "@"
DEFAULT_RECORD_TTL = 300


class DNSRecord(BaseModel):
    """A single provider-native resource record.

    ``name`` is relative to the owning zone, or :data:`APEX_MARKER`.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    rdata: str
    ttl: int

    @property
    def identity(self) -> tuple[str, str, str]:
        """Match key for add/remove: type, name and rdata, never TTL."""
        return (self.type, self.name, self.rdata)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DNSRecord:
        return cls(
            type=data["Type"],
            name=data["Name"],
            rdata=data["RData"],
            ttl=data.get("TTL") or DEFAULT_RECORD_TTL,
        )

    def to_api(self) -> dict[str, Any]:
        return {"Name": self.name, "Type": self.type, "RData": self.rdata, "TTL": self.ttl}


class RecordSet:
    """Immutable, ordered collection of records keyed by identity.

    :meth:`add` and :meth:`remove` return a new set and leave the
    receiver untouched.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[DNSRecord] = ()) -> None:
        self._records: tuple[DNSRecord, ...] = tuple(records)

    def add(self, *records: DNSRecord) -> RecordSet:
        """Return a set containing *records*.

        A record whose identity is already present replaces the existing
        entry in place, so a changed TTL is picked up.
        """
        current = list(self._records)
        for record in records:
            for i, existing in enumerate(current):
                if existing.identity == record.identity:
                    current[i] = record
                    break
            else:
                current.append(record)
        return RecordSet(current)

    def remove(self, *records: DNSRecord) -> RecordSet:
        """Return a set without any entry matching the identity of *records*."""
        drop = {r.identity for r in records}
        return RecordSet(r for r in self._records if r.identity not in drop)

    def __iter__(self) -> Iterator[DNSRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordSet):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"RecordSet({list(self._records)!r})"


class DNSZone(BaseModel):
    """A DNS zone and a snapshot of its records."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    records: tuple[DNSRecord, ...] = ()

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> DNSZone:
        """Build a zone from a ``CommonServiceItem`` payload."""
        settings = (item.get("Settings") or {}).get("DNS") or {}
        status = item.get("Status") or {}
        return cls(
            id=str(item["ID"]),
            name=status.get("Zone") or item["Name"],
            records=tuple(
                DNSRecord.from_api(r) for r in settings.get("ResourceRecordSets") or []
            ),
        )

    def record_set(self) -> RecordSet:
        return RecordSet(self.records)
