"""Provider-agnostic models and core utilities.

Import them to type-hint your own code or to build another provider.
"""

from .provider import ProviderBlueprint
from .endpoint import Changes, Endpoint, supported_record_type
from .domain_filter import DomainFilter


__all__ = [
    "ProviderBlueprint",
    "Changes",
    "Endpoint",
    "DomainFilter",
    "supported_record_type",
]
