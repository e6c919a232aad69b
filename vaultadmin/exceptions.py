"""
Error taxonomy for vaultadmin.

Builders raise these for inputs their contract requires; errors coming from
the data-access layer or the Stripe library are never wrapped.
"""


class VaultAdminError(Exception):
    """Base class for vaultadmin errors."""


class MissingRequiredInput(VaultAdminError, ValueError):
    """A required domain object (provider, storable, billing info) was None."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is required")
