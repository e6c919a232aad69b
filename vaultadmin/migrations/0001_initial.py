import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                (
                    "storage",
                    models.BigIntegerField(
                        blank=True, help_text="Storage used in bytes", null=True
                    ),
                ),
                (
                    "max_storage_gb",
                    models.SmallIntegerField(
                        blank=True, help_text="Storage quota in GB", null=True
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("billing_email", models.EmailField(blank=True, max_length=254)),
                (
                    "gateway_customer_id",
                    models.CharField(
                        blank=True,
                        help_text="Stripe customer ID (cus_xxxxx)",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "gateway_subscription_id",
                    models.CharField(
                        blank=True,
                        help_text="Stripe subscription ID (sub_xxxxx)",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("enabled", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "vaultadmin_organization",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Provider",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("business_name", models.CharField(blank=True, max_length=255)),
                ("billing_email", models.EmailField(blank=True, max_length=254)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("created", "Created")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("enabled", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "vaultadmin_provider",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ProviderUser",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("email", models.EmailField(max_length=254)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("invited", "Invited"),
                            ("accepted", "Accepted"),
                            ("confirmed", "Confirmed"),
                        ],
                        default="invited",
                        max_length=20,
                    ),
                ),
                (
                    "type",
                    models.SmallIntegerField(
                        choices=[(0, "Provider Admin"), (1, "Service User")],
                        db_index=True,
                        default=1,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "provider",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="provider_users",
                        to="vaultadmin.provider",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="provider_memberships",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "vaultadmin_provider_user",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("provider", "email"),
                        name="provider_user_unique_email",
                    )
                ],
            },
        ),
    ]
