"""
Admin interface for providers and organizations.
"""

from django.contrib import admin
from django.core.exceptions import PermissionDenied
from django.db.models import Count
from django.shortcuts import get_object_or_404
from django.template.response import TemplateResponse
from django.urls import path, reverse
from django.utils.html import format_html

from .models import Organization, Provider, ProviderUser
from .services import ProviderSummaryBuilder
from .utils import readable_bytes_size


class ProviderUserInline(admin.TabularInline):
    model = ProviderUser
    extra = 0
    fields = ("email", "user", "type", "status")
    raw_id_fields = ("user",)


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "business_name",
        "status",
        "enabled",
        "user_count",
        "summary_link",
        "created_at",
    )
    list_filter = ("status", "enabled")
    search_fields = ("name", "billing_email")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ProviderUserInline]
    fieldsets = (
        (
            "Provider",
            {
                "fields": ("name", "business_name", "billing_email"),
            },
        ),
        (
            "State",
            {
                "fields": ("status", "enabled"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_queryset(self, request):
        return (
            super()
            .get_queryset(request)
            .annotate(user_count=Count("provider_users"))
        )

    def get_urls(self):
        urls = [
            path(
                "<uuid:object_id>/summary/",
                self.admin_site.admin_view(self.summary_view),
                name="vaultadmin_provider_summary",
            ),
        ]
        return urls + super().get_urls()

    def summary_view(self, request, object_id):
        """Render the provider with its user count and administrators."""
        provider = get_object_or_404(Provider, pk=object_id)
        if not self.has_view_permission(request, provider):
            raise PermissionDenied

        provider_users = provider.provider_users.select_related("user").order_by(
            "email"
        )
        summary = ProviderSummaryBuilder.build(provider, provider_users)

        context = {
            **self.admin_site.each_context(request),
            "title": f"Provider: {provider.name}",
            "opts": self.model._meta,
            "original": provider,
            "summary": summary,
        }
        return TemplateResponse(request, "vaultadmin/provider_summary.html", context)

    def user_count(self, obj):
        return obj.user_count

    user_count.short_description = "Users"
    user_count.admin_order_field = "user_count"

    def summary_link(self, obj):
        url = reverse("admin:vaultadmin_provider_summary", args=[obj.pk])
        return format_html('<a href="{}">View</a>', url)

    summary_link.short_description = "Summary"


@admin.register(ProviderUser)
class ProviderUserAdmin(admin.ModelAdmin):
    list_display = ("email", "provider", "type", "status", "created_at")
    list_filter = ("type", "status")
    search_fields = ("email", "provider__name")
    raw_id_fields = ("user", "provider")


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "billing_email",
        "storage_display",
        "max_storage_gb",
        "gateway_customer_id",
        "enabled",
    )
    list_filter = ("enabled",)
    search_fields = ("name", "billing_email", "gateway_customer_id")
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        (
            "Organization",
            {
                "fields": ("name", "billing_email", "enabled"),
            },
        ),
        (
            "Storage",
            {
                "fields": ("storage", "max_storage_gb"),
            },
        ),
        (
            "Stripe",
            {
                "fields": ("gateway_customer_id", "gateway_subscription_id"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def storage_display(self, obj):
        """Display storage in human-readable format."""
        if obj.storage is None:
            return "-"
        return readable_bytes_size(obj.storage)

    storage_display.short_description = "Storage"
