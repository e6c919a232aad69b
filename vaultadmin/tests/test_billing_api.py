"""
Billing API Endpoint Tests

Tests for GET /api/v1/organizations/<uuid>/billing/:
- Wire format (camelCase fields, nested views)
- Permissions
- Error envelope for unknown organizations and Stripe failures
"""

import uuid
from unittest.mock import patch

import stripe
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from vaultadmin.billing.stripe_service import BillingInfo
from vaultadmin.tests.factories import (
    OrganizationFactory,
    UserFactory,
    stripe_bank_account,
    stripe_card,
    stripe_charge,
    stripe_invoice,
    stripe_subscription,
)

GET_BILLING_INFO = "vaultadmin.billing.views.get_billing_info"


class BillingAPITestBase(APITestCase):
    """Base class with a staff user and an organization."""

    def setUp(self):
        self.staff = UserFactory(admin=True)
        self.organization = OrganizationFactory(
            storage=1610612736, max_storage_gb=10
        )
        self.url = reverse(
            "billing:organization_billing", args=[self.organization.pk]
        )
        self.client.force_authenticate(user=self.staff)


class TestBillingResponse(BillingAPITestBase):
    def test_full_response(self):
        billing = BillingInfo(
            payment_source=stripe_card(),
            subscription=stripe_subscription(),
            charges=[
                stripe_charge(
                    source=stripe_bank_account(), amount_refunded=500, invoice=None
                )
            ],
            upcoming_invoice=stripe_invoice(),
        )

        with patch(GET_BILLING_INFO, return_value=billing) as get_billing_info:
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        get_billing_info.assert_called_once_with(self.organization)

        data = response.json()
        self.assertEqual(data["object"], "billing")
        self.assertEqual(data["storageLabel"], "1.5 GB")
        self.assertEqual(data["storageGb"], 1.5)
        self.assertEqual(data["storageQuotaGb"], 10)
        self.assertEqual(
            data["paymentSource"],
            {
                "kind": "card",
                "cardBrand": "Visa",
                "description": "Visa, *4242, 09/2025",
            },
        )

        subscription = data["subscription"]
        self.assertEqual(subscription["status"], "active")
        self.assertEqual(subscription["trialStart"], "2024-01-01T00:00:00Z")
        self.assertEqual(subscription["periodEnd"], "2024-02-01T00:00:00Z")
        self.assertIsNone(subscription["cancelledAt"])
        self.assertFalse(subscription["cancelAtPeriodEnd"])
        self.assertEqual(
            subscription["items"],
            [
                {
                    "planName": "Teams (Monthly)",
                    "amountPerUnit": 4.0,
                    "billingInterval": "month",
                    "quantity": 5,
                }
            ],
        )

        self.assertEqual(
            data["upcomingInvoice"],
            {"amountDue": 20.0, "date": "2024-02-01T00:00:00Z"},
        )

        self.assertEqual(len(data["charges"]), 1)
        charge = data["charges"][0]
        self.assertEqual(charge["createdAt"], "2024-01-01T00:00:00Z")
        self.assertEqual(charge["amount"], 19.99)
        self.assertEqual(charge["refundedAmount"], 5.0)
        self.assertFalse(charge["refunded"])
        self.assertTrue(charge["partiallyRefunded"])
        self.assertIsNone(charge["invoiceId"])
        self.assertEqual(
            charge["paymentSource"],
            {"kind": "bank_account", "cardBrand": None, "description": "Chase, *1234"},
        )

    def test_empty_billing(self):
        self.organization.storage = None
        self.organization.save()

        with patch(GET_BILLING_INFO, return_value=BillingInfo()):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertIsNone(data["storageLabel"])
        self.assertEqual(data["storageGb"], 0)
        self.assertIsNone(data["paymentSource"])
        self.assertIsNone(data["subscription"])
        self.assertIsNone(data["upcomingInvoice"])
        self.assertEqual(data["charges"], [])

    def test_subscription_without_items(self):
        subscription = stripe_subscription()
        del subscription["items"]

        with patch(GET_BILLING_INFO, return_value=BillingInfo(subscription=subscription)):
            response = self.client.get(self.url)

        self.assertEqual(response.json()["subscription"]["items"], [])

    def test_request_id_header(self):
        with patch(GET_BILLING_INFO, return_value=BillingInfo()):
            response = self.client.get(self.url, HTTP_X_REQUEST_ID="req-123")

        self.assertEqual(response["X-Request-Id"], "req-123")


class TestBillingErrors(BillingAPITestBase):
    def test_unknown_organization(self):
        url = reverse("billing:organization_billing", args=[uuid.uuid4()])

        with patch(GET_BILLING_INFO) as get_billing_info:
            response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["error"]["code"], "not_found")
        get_billing_info.assert_not_called()

    def test_stripe_failure_is_bad_gateway(self):
        error = stripe.APIConnectionError("Could not connect to Stripe")

        with patch(GET_BILLING_INFO, side_effect=error):
            response = self.client.get(self.url, HTTP_X_REQUEST_ID="req-502")

        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        body = response.json()["error"]
        self.assertEqual(body["code"], "payment_processor_error")
        self.assertEqual(body["type"], "/errors/payment-processor-error")
        self.assertEqual(body["request_id"], "req-502")

    def test_unexpected_error_is_internal(self):
        with patch(GET_BILLING_INFO, side_effect=RuntimeError("boom")):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json()["error"]["code"], "internal_server_error")


class TestBillingPermissions(BillingAPITestBase):
    def test_unauthenticated(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["error"]["code"], "authentication_failed")

    def test_non_staff_forbidden(self):
        self.client.force_authenticate(user=UserFactory())

        with patch(GET_BILLING_INFO) as get_billing_info:
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "permission_denied")
        get_billing_info.assert_not_called()

    def test_jwt_access_token(self):
        self.client.force_authenticate(user=None)
        token_response = self.client.post(
            reverse("token_obtain_pair"),
            {"username": self.staff.username, "password": "testpass123"},
            format="json",
        )
        access = token_response.json()["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        with patch(GET_BILLING_INFO, return_value=BillingInfo()):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
