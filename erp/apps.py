from django.apps import AppConfig


class ErpConfig(AppConfig):
    """Procurement, stock ledger and sales conversion workflows."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "erp"
    verbose_name = "ERP"
