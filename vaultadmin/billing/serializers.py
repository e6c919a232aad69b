"""
Billing API serializers.

Render BillingSummary views with the camelCase field names existing API
clients expect. Read-only: nothing here accepts input.
"""

from rest_framework import serializers
from drf_spectacular.utils import extend_schema_field
from drf_spectacular.types import OpenApiTypes


class PaymentSourceSerializer(serializers.Serializer):
    kind = serializers.SerializerMethodField()
    cardBrand = serializers.CharField(source="card_brand", allow_null=True)
    description = serializers.CharField(allow_null=True)

    @extend_schema_field(
        {"type": "string", "enum": ["card", "bank_account", "other"]}
    )
    def get_kind(self, obj):
        return obj.kind.value


class SubscriptionItemSerializer(serializers.Serializer):
    planName = serializers.CharField(source="plan_name", allow_null=True)
    amountPerUnit = serializers.DecimalField(
        source="amount_per_unit",
        max_digits=12,
        decimal_places=2,
        coerce_to_string=False,
    )
    billingInterval = serializers.CharField(
        source="billing_interval", allow_null=True
    )
    quantity = serializers.IntegerField()


class SubscriptionSerializer(serializers.Serializer):
    status = serializers.CharField(allow_null=True)
    trialStart = serializers.DateTimeField(source="trial_start", allow_null=True)
    trialEnd = serializers.DateTimeField(source="trial_end", allow_null=True)
    periodEnd = serializers.DateTimeField(source="period_end", allow_null=True)
    cancelledAt = serializers.DateTimeField(source="cancelled_at", allow_null=True)
    cancelAtPeriodEnd = serializers.BooleanField(source="cancel_at_period_end")
    items = SubscriptionItemSerializer(many=True)


class InvoiceSerializer(serializers.Serializer):
    amountDue = serializers.DecimalField(
        source="amount_due",
        max_digits=12,
        decimal_places=2,
        coerce_to_string=False,
    )
    date = serializers.DateTimeField(allow_null=True)


class ChargeSerializer(serializers.Serializer):
    createdAt = serializers.DateTimeField(source="created_at")
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False
    )
    paymentSource = PaymentSourceSerializer(source="payment_source", allow_null=True)
    status = serializers.CharField(allow_null=True)
    failureMessage = serializers.CharField(source="failure_message", allow_null=True)
    refunded = serializers.BooleanField()
    partiallyRefunded = serializers.BooleanField(source="partially_refunded")
    refundedAmount = serializers.DecimalField(
        source="refunded_amount",
        max_digits=12,
        decimal_places=2,
        coerce_to_string=False,
    )
    invoiceId = serializers.CharField(source="invoice_id", allow_null=True)


class BillingSummarySerializer(serializers.Serializer):
    """Wire representation of a BillingSummary."""

    object = serializers.SerializerMethodField()
    storageLabel = serializers.CharField(source="storage_label", allow_null=True)
    storageGb = serializers.FloatField(source="storage_gb")
    storageQuotaGb = serializers.IntegerField(
        source="storage_quota_gb", allow_null=True
    )
    paymentSource = PaymentSourceSerializer(source="payment_source", allow_null=True)
    subscription = SubscriptionSerializer(allow_null=True)
    upcomingInvoice = InvoiceSerializer(source="upcoming_invoice", allow_null=True)
    charges = ChargeSerializer(many=True)

    @extend_schema_field(OpenApiTypes.STR)
    def get_object(self, obj):
        return "billing"
