"""
URL configuration for erp_site project.

The REST API lives under ``/api/``; ``core`` contributes the health check and
dashboard counts.
"""

from django.contrib import admin
from django.urls import include, path

from core.views import dashboard_counts, health_check

urlpatterns = [
    path("admin/", admin.site.urls),
    path("healthz", health_check, name="health-check"),
    path("dashboard/counts/", dashboard_counts, name="dashboard-counts"),
    path("api-auth/", include("rest_framework.urls")),
    path("api/", include("erp.urls")),
]
