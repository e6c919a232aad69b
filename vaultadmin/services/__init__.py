"""
Service layer for vaultadmin.

Builders here shape already-loaded domain objects into views. They never
query the database or call Stripe themselves.
"""

from vaultadmin.services.provider_summary import (
    ProviderSummary,
    ProviderSummaryBuilder,
)

__all__ = ["ProviderSummary", "ProviderSummaryBuilder"]
