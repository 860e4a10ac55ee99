"""Core application configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Site-level views: health check and dashboard counts."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
