"""
Stripe integration service for billing reads.

Assembles the BillingInfo aggregate for a storable entity:
- Default payment source of the Stripe customer
- Current subscription
- Recent charges
- Upcoming invoice preview

Stripe errors are not caught here (except "no upcoming invoice"); callers
turn them into API errors.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import stripe
from django.conf import settings

from vaultadmin.utils import stripe_field

logger = logging.getLogger(__name__)


@dataclass
class BillingInfo:
    """Billing records fetched from Stripe for one customer."""

    payment_source: Optional[Any] = None
    subscription: Optional[Any] = None
    charges: List[Any] = field(default_factory=list)
    upcoming_invoice: Optional[Any] = None


def get_stripe_client():
    """
    Get the stripe module configured with the secret key and API version.

    The API version is pinned so subscriptions keep ``current_period_end``
    and charges keep ``invoice``.
    """
    stripe.api_key = getattr(settings, "STRIPE_SECRET_KEY", None)
    stripe.api_version = getattr(settings, "STRIPE_API_VERSION", None)
    return stripe


def get_payment_source(client, customer_id: str) -> Optional[Any]:
    """Return the customer's default source, or None when it has none."""
    customer = client.Customer.retrieve(customer_id, expand=["default_source"])
    if stripe_field(customer, "deleted"):
        logger.warning("Stripe customer %s is deleted", customer_id)
        return None
    return stripe_field(customer, "default_source")


def get_charges(client, customer_id: str) -> List[Any]:
    """Return the most recent charges of a customer, newest first."""
    limit = getattr(settings, "BILLING_CHARGE_HISTORY_LIMIT", 20)
    charges = client.Charge.list(customer=customer_id, limit=limit)
    return list(stripe_field(charges, "data") or [])


def get_upcoming_invoice(client, customer_id: str) -> Optional[Any]:
    """
    Preview the next invoice of a customer.

    Stripe answers with an invalid request error when the customer has
    nothing to invoice (no active subscription); that is not a failure.
    """
    try:
        return client.Invoice.create_preview(customer=customer_id)
    except stripe.InvalidRequestError as e:
        logger.info("No upcoming invoice for Stripe customer %s: %s", customer_id, e)
        return None


def get_billing_info(storable) -> BillingInfo:
    """
    Fetch billing records for an organization (or any storable entity).

    Args:
        storable: Entity with gateway_customer_id and gateway_subscription_id

    Returns:
        BillingInfo; empty when the entity has no Stripe customer

    Raises:
        stripe.StripeError: Stripe request failed
    """
    billing = BillingInfo()

    customer_id = storable.gateway_customer_id
    if not customer_id:
        logger.info("No Stripe customer for %s, returning empty billing info", storable)
        return billing

    client = get_stripe_client()

    billing.payment_source = get_payment_source(client, customer_id)
    billing.charges = get_charges(client, customer_id)

    subscription_id = storable.gateway_subscription_id
    if subscription_id:
        billing.subscription = client.Subscription.retrieve(subscription_id)
        if stripe_field(billing.subscription, "status") != "canceled":
            billing.upcoming_invoice = get_upcoming_invoice(client, customer_id)

    logger.info(
        "Fetched billing info for Stripe customer %s: %d charges, subscription=%s",
        customer_id,
        len(billing.charges),
        subscription_id or "none",
    )

    return billing
