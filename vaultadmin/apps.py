from django.apps import AppConfig


class VaultAdminConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vaultadmin"
    verbose_name = "Vault administration"
