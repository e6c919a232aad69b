"""
Billing URL configuration.
"""

from django.urls import path
from vaultadmin.billing import views

app_name = "billing"

urlpatterns = [
    path(
        "organizations/<uuid:organization_id>/billing/",
        views.OrganizationBillingView.as_view(),
        name="organization_billing",
    ),
]
