"""Provider-agnostic desired-state models: endpoints and change sets."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

RECORD_TYPE_A = "A"
RECORD_TYPE_AAAA = "AAAA"
RECORD_TYPE_CNAME = "CNAME"
RECORD_TYPE_TXT = "TXT"
RECORD_TYPE_SRV = "SRV"
RECORD_TYPE_NS = "NS"
RECORD_TYPE_MX = "MX"

SUPPORTED_RECORD_TYPES: frozenset[str] = frozenset(
    {
        RECORD_TYPE_A,
        RECORD_TYPE_AAAA,
        RECORD_TYPE_CNAME,
        RECORD_TYPE_SRV,
        RECORD_TYPE_TXT,
        RECORD_TYPE_NS,
        RECORD_TYPE_MX,
    }
)


def supported_record_type(record_type: str) -> bool:
    """Return True if records of *record_type* are surfaced to the planner."""
    return record_type in SUPPORTED_RECORD_TYPES


class Endpoint(BaseModel):
    """A desired DNS record: one name, one type, one or more targets.

    ``record_ttl`` of ``0`` means the TTL is not configured and the
    provider default applies.
    """

    model_config = ConfigDict(frozen=True)

    dns_name: str
    record_type: str
    targets: tuple[str, ...] = ()
    record_ttl: int = 0

    @classmethod
    def with_ttl(
        cls, dns_name: str, record_type: str, ttl: int, *targets: str
    ) -> Endpoint:
        return cls(dns_name=dns_name, record_type=record_type, targets=targets, record_ttl=ttl)

    @property
    def is_ttl_configured(self) -> bool:
        return self.record_ttl > 0

    def __str__(self) -> str:
        return f"{self.dns_name} {self.record_ttl} IN {self.record_type} {list(self.targets)}"


class Changes(BaseModel):
    """The four-way diff that drives one reconciliation cycle.

    Attributes:
        create: Endpoints that must be added.
        update_new: Desired state of endpoints being updated.
        update_old: Previous state of endpoints being updated.
        delete: Endpoints that must be removed.
    """

    model_config = ConfigDict(frozen=True)

    create: tuple[Endpoint, ...] = ()
    update_new: tuple[Endpoint, ...] = ()
    update_old: tuple[Endpoint, ...] = ()
    delete: tuple[Endpoint, ...] = ()

    def has_changes(self) -> bool:
        """True when there is anything to create, update or delete.

        ``update_old`` alone does not count.
        """
        return len(self.create) + len(self.delete) + len(self.update_new) > 0
