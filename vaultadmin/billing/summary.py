"""
Billing summary returned by the organization billing API.

Shapes Stripe records (payment source, subscription, charges, upcoming
invoice) plus the storage usage of a storable entity into plain, immutable
views. Stripe records are read with ``stripe_field`` so ``StripeObject``
instances and plain dicts both work.

Conversions:
- Money: integer minor units / 100, quantized to 0.01
- Storage: bytes / 1073741824, rounded to 2 decimals
- Timestamps: unix seconds to aware UTC datetimes
"""

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Tuple

from vaultadmin.billing.stripe_service import BillingInfo
from vaultadmin.exceptions import MissingRequiredInput
from vaultadmin.utils import (
    bytes_to_gigabytes,
    from_unix_timestamp,
    minor_units_to_decimal,
    readable_bytes_size,
    stripe_field,
)

logger = logging.getLogger(__name__)


class PaymentSourceKind(enum.Enum):
    CARD = "card"
    BANK_ACCOUNT = "bank_account"
    OTHER = "other"

    @classmethod
    def from_stripe(cls, source: Any) -> "PaymentSourceKind":
        """Map the Stripe ``object`` discriminant to a kind."""
        try:
            return cls(stripe_field(source, "object"))
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class PaymentSourceView:
    kind: PaymentSourceKind
    card_brand: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_stripe(cls, source: Any) -> "PaymentSourceView":
        kind = PaymentSourceKind.from_stripe(source)

        if kind is PaymentSourceKind.CARD:
            brand = stripe_field(source, "brand")
            parts = [brand, f"*{stripe_field(source, 'last4')}"]
            exp_month = stripe_field(source, "exp_month")
            exp_year = stripe_field(source, "exp_year")
            if exp_month is not None and exp_year is not None:
                parts.append(f"{str(exp_month).zfill(2)}/{exp_year}")
            return cls(kind=kind, card_brand=brand, description=", ".join(parts))

        if kind is PaymentSourceKind.BANK_ACCOUNT:
            description = (
                f"{stripe_field(source, 'bank_name')}, "
                f"*{stripe_field(source, 'last4')}"
            )
            return cls(kind=kind, description=description)

        # Sources, payment methods and wallets have no description yet
        logger.info(
            "Unsupported payment source type %r, leaving description empty",
            stripe_field(source, "object"),
        )
        return cls(kind=kind)


@dataclass(frozen=True)
class SubscriptionItemView:
    plan_name: Optional[str]
    amount_per_unit: Decimal
    billing_interval: Optional[str]
    quantity: int

    @classmethod
    def from_stripe(cls, item: Any) -> "SubscriptionItemView":
        quantity = stripe_field(item, "quantity") or 0
        plan = stripe_field(item, "plan")
        if plan is None:
            return cls(
                plan_name=None,
                amount_per_unit=Decimal("0.00"),
                billing_interval=None,
                quantity=quantity,
            )

        return cls(
            plan_name=stripe_field(plan, "name") or stripe_field(plan, "nickname"),
            amount_per_unit=minor_units_to_decimal(stripe_field(plan, "amount")),
            billing_interval=stripe_field(plan, "interval"),
            quantity=quantity,
        )


@dataclass(frozen=True)
class SubscriptionView:
    status: str
    trial_start: Optional[datetime] = None
    trial_end: Optional[datetime] = None
    period_end: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancel_at_period_end: bool = False
    items: Tuple[SubscriptionItemView, ...] = field(default_factory=tuple)

    @classmethod
    def from_stripe(cls, subscription: Any) -> "SubscriptionView":
        item_data = stripe_field(stripe_field(subscription, "items"), "data") or ()
        items = tuple(SubscriptionItemView.from_stripe(i) for i in item_data)

        # Newer API versions moved the billing period onto the items
        period_end = stripe_field(subscription, "current_period_end")
        if period_end is None and item_data:
            period_end = stripe_field(item_data[0], "current_period_end")

        return cls(
            status=stripe_field(subscription, "status"),
            trial_start=from_unix_timestamp(stripe_field(subscription, "trial_start")),
            trial_end=from_unix_timestamp(stripe_field(subscription, "trial_end")),
            period_end=from_unix_timestamp(period_end),
            cancelled_at=from_unix_timestamp(stripe_field(subscription, "canceled_at")),
            cancel_at_period_end=bool(
                stripe_field(subscription, "cancel_at_period_end")
            ),
            items=items,
        )


@dataclass(frozen=True)
class InvoiceView:
    amount_due: Decimal
    date: Optional[datetime] = None

    @classmethod
    def from_stripe(cls, invoice: Any) -> "InvoiceView":
        date = stripe_field(invoice, "date")
        if date is None:
            date = stripe_field(invoice, "created")
        return cls(
            amount_due=minor_units_to_decimal(stripe_field(invoice, "amount_due")),
            date=from_unix_timestamp(date),
        )


@dataclass(frozen=True)
class ChargeView:
    created_at: datetime
    amount: Decimal
    status: str
    refunded: bool
    refunded_amount: Decimal
    payment_source: Optional[PaymentSourceView] = None
    failure_message: Optional[str] = None
    invoice_id: Optional[str] = None

    @property
    def partially_refunded(self) -> bool:
        return not self.refunded and self.refunded_amount > 0

    @classmethod
    def from_stripe(cls, charge: Any) -> "ChargeView":
        source = stripe_field(charge, "source")
        invoice = stripe_field(charge, "invoice")
        # Expanded invoices arrive as records instead of ids
        if invoice is not None and not isinstance(invoice, str):
            invoice = stripe_field(invoice, "id")

        return cls(
            created_at=from_unix_timestamp(stripe_field(charge, "created")),
            amount=minor_units_to_decimal(stripe_field(charge, "amount")),
            status=stripe_field(charge, "status"),
            refunded=bool(stripe_field(charge, "refunded")),
            refunded_amount=minor_units_to_decimal(
                stripe_field(charge, "amount_refunded")
            ),
            payment_source=(
                PaymentSourceView.from_stripe(source) if source is not None else None
            ),
            failure_message=stripe_field(charge, "failure_message"),
            invoice_id=invoice,
        )


@dataclass(frozen=True)
class BillingSummary:
    storage_label: Optional[str]
    storage_gb: float
    storage_quota_gb: Optional[int]
    payment_source: Optional[PaymentSourceView]
    subscription: Optional[SubscriptionView]
    upcoming_invoice: Optional[InvoiceView]
    charges: Tuple[ChargeView, ...]


class BillingSummaryBuilder:
    """
    Stateless builder for BillingSummary.

    All methods are static - no instance state, no I/O. Errors raised while
    fetching the inputs belong to the caller.
    """

    @staticmethod
    def build(storable, billing: BillingInfo) -> BillingSummary:
        """
        Build the billing summary of a storable entity.

        Args:
            storable: Entity exposing ``storage`` (bytes or None) and
                ``max_storage_gb`` (int or None)
            billing: Aggregate fetched from Stripe

        Returns:
            BillingSummary

        Raises:
            MissingRequiredInput: storable or billing is None
        """
        if storable is None:
            raise MissingRequiredInput("storable")
        if billing is None:
            raise MissingRequiredInput("billing")

        storage = storable.storage

        return BillingSummary(
            storage_label=readable_bytes_size(storage) if storage is not None else None,
            storage_gb=bytes_to_gigabytes(storage),
            storage_quota_gb=storable.max_storage_gb,
            payment_source=(
                PaymentSourceView.from_stripe(billing.payment_source)
                if billing.payment_source is not None
                else None
            ),
            subscription=(
                SubscriptionView.from_stripe(billing.subscription)
                if billing.subscription is not None
                else None
            ),
            upcoming_invoice=(
                InvoiceView.from_stripe(billing.upcoming_invoice)
                if billing.upcoming_invoice is not None
                else None
            ),
            charges=tuple(ChargeView.from_stripe(c) for c in billing.charges),
        )
