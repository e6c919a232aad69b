"""
Data-access models for vaultadmin.

Providers are managed tenants administered by their provider users.
Organizations are storable, billable entities linked to a Stripe customer.
"""

import uuid

from django.conf import settings
from django.db import models


class ProviderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CREATED = "created", "Created"


class ProviderUserStatus(models.TextChoices):
    INVITED = "invited", "Invited"
    ACCEPTED = "accepted", "Accepted"
    CONFIRMED = "confirmed", "Confirmed"


class ProviderUserType(models.IntegerChoices):
    PROVIDER_ADMIN = 0, "Provider Admin"
    SERVICE_USER = 1, "Service User"


class StorableModel(models.Model):
    """
    Abstract base for entities that consume storage and carry a quota.

    ``storage`` is the number of bytes in use; ``None`` means no usage has
    been recorded yet, which is different from zero.
    """

    storage = models.BigIntegerField(
        blank=True,
        null=True,
        help_text="Storage used in bytes",
    )
    max_storage_gb = models.SmallIntegerField(
        blank=True,
        null=True,
        help_text="Storage quota in GB",
    )

    class Meta:
        abstract = True


class Provider(models.Model):
    """A tenant managed by its provider administrators."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    business_name = models.CharField(max_length=255, blank=True)
    billing_email = models.EmailField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=ProviderStatus.choices,
        default=ProviderStatus.PENDING,
    )
    enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "vaultadmin_provider"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ProviderUser(models.Model):
    """
    Membership of a user in a provider.

    Invited members have no linked user yet, only an email address.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider = models.ForeignKey(
        Provider,
        on_delete=models.CASCADE,
        related_name="provider_users",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="provider_memberships",
        blank=True,
        null=True,
    )
    email = models.EmailField()
    status = models.CharField(
        max_length=20,
        choices=ProviderUserStatus.choices,
        default=ProviderUserStatus.INVITED,
    )
    type = models.SmallIntegerField(
        choices=ProviderUserType.choices,
        default=ProviderUserType.SERVICE_USER,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "vaultadmin_provider_user"
        constraints = [
            models.UniqueConstraint(
                fields=["provider", "email"],
                name="provider_user_unique_email",
            ),
        ]

    def __str__(self):
        return f"{self.email} ({self.get_type_display()})"

    @property
    def name(self):
        """Full name of the linked user, empty for pending invitations."""
        if self.user is None:
            return ""
        return self.user.get_full_name()


class Organization(StorableModel):
    """Billable organization linked to a Stripe customer and subscription."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    billing_email = models.EmailField(blank=True)
    gateway_customer_id = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="Stripe customer ID (cus_xxxxx)",
    )
    gateway_subscription_id = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="Stripe subscription ID (sub_xxxxx)",
    )
    enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "vaultadmin_organization"
        ordering = ["name"]

    def __str__(self):
        return self.name
