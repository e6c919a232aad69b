"""
Provider summary for the provider admin page.

Adapts a provider and its user memberships into the view rendered by the
admin: the provider itself, how many users it has and which of them are
provider administrators.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from vaultadmin.exceptions import MissingRequiredInput
from vaultadmin.models import ProviderUserType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSummary:
    """View of a provider for its admin page."""

    provider: Any
    user_count: int
    admins: Tuple[Any, ...]


class ProviderSummaryBuilder:
    """
    Stateless builder for ProviderSummary.

    All methods are static - no instance state.
    """

    @staticmethod
    def build(provider, provider_users: Optional[Iterable[Any]]) -> ProviderSummary:
        """
        Build the summary of a provider.

        Args:
            provider: Provider entity, passed through untouched
            provider_users: Membership records (list or queryset) each
                exposing ``type``. ``None`` is treated as no users.

        Returns:
            ProviderSummary with admins in input order

        Raises:
            MissingRequiredInput: provider is None
        """
        if provider is None:
            raise MissingRequiredInput("provider")

        users = list(provider_users) if provider_users is not None else []
        admins = tuple(
            user for user in users if user.type == ProviderUserType.PROVIDER_ADMIN
        )

        logger.debug(
            "Built provider summary for %s: %d users, %d admins",
            getattr(provider, "pk", provider),
            len(users),
            len(admins),
        )

        return ProviderSummary(provider=provider, user_count=len(users), admins=admins)
