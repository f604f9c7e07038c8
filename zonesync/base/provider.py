"""DNS provider blueprint."""

from abc import ABC, abstractmethod

from zonesync.base.domain_filter import DomainFilter
from zonesync.base.endpoint import Changes, Endpoint


class ProviderBlueprint(ABC):
    """Abstract interface a reconciliation controller drives.

    A controller reads current state with :meth:`records`, plans a
    :class:`Changes` diff against desired state, and hands it to
    :meth:`apply_changes`.
    """

    domain_filter: DomainFilter

    @abstractmethod
    def records(self) -> list[Endpoint]:
        """Return the current records of all managed zones as endpoints."""

    @abstractmethod
    def apply_changes(self, changes: Changes | None) -> None:
        """Apply a change set to the provider.

        Args:
            changes: The diff to apply; ``None`` is a no-op.

        Raises:
            ProviderUnavailableError: If a provider call fails.
        """

    def adjust_endpoints(self, endpoints: list[Endpoint]) -> list[Endpoint]:
        """Canonicalize desired endpoints before planning.

        The default keeps them unchanged.
        """
        return endpoints

    def get_domain_filter(self) -> DomainFilter:
        return self.domain_filter
