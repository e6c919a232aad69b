"""
Billing API views.
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from vaultadmin.billing.serializers import BillingSummarySerializer
from vaultadmin.billing.stripe_service import get_billing_info
from vaultadmin.billing.summary import BillingSummaryBuilder
from vaultadmin.logging_utils import (
    add_log_context,
    extract_request_context,
    get_logger,
)
from vaultadmin.models import Organization

logger = get_logger(__name__)


class OrganizationBillingView(APIView):
    """
    Billing summary of an organization.

    GET /api/v1/organizations/<uuid>/billing/

    Storage usage and quota, default payment source, subscription, upcoming
    invoice and recent charges, read live from Stripe.
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        tags=["Billing"],
        summary="Get organization billing summary",
        responses={200: BillingSummarySerializer},
    )
    def get(self, request, organization_id):
        organization = get_object_or_404(Organization, pk=organization_id)

        with add_log_context(
            organization_id=str(organization.pk), **extract_request_context(request)
        ):
            billing = get_billing_info(organization)
            summary = BillingSummaryBuilder.build(organization, billing)
            logger.info(
                "Built billing summary for organization %s (%d charges)",
                organization.pk,
                len(summary.charges),
            )

        return Response(BillingSummarySerializer(summary).data)
