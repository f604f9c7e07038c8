"""Domain filter used to restrict which provider zones are managed."""

from __future__ import annotations

from typing import Iterable


def _normalize(domain: str) -> str:
    return domain.strip().rstrip(".").lower()


class DomainFilter:
    """Match zone names against a list of domains and exclusions.

    An empty filter matches every zone. A name matches a domain when it
    equals the domain or is one of its subdomains. Exclusions are checked
    the same way and always win.
    """

    def __init__(
        self,
        filters: Iterable[str] | None = None,
        exclude: Iterable[str] | None = None,
    ) -> None:
        self.filters = [_normalize(f) for f in filters or () if _normalize(f)]
        self.exclude = [_normalize(e) for e in exclude or () if _normalize(e)]

    @staticmethod
    def _match_any(domains: list[str], name: str) -> bool:
        for domain in domains:
            if domain.startswith("."):
                if name.endswith(domain):
                    return True
            elif name == domain or name.endswith("." + domain):
                return True
        return False

    def match(self, name: str) -> bool:
        name = _normalize(name)
        if self.filters and not self._match_any(self.filters, name):
            return False
        return not self._match_any(self.exclude, name)

    def is_configured(self) -> bool:
        return bool(self.filters)

    def __repr__(self) -> str:
        return f"DomainFilter(filters={self.filters!r}, exclude={self.exclude!r})"
