"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "licenses/generate",
        views.GenerateLicenseView.as_view(),
        name="generate-license",
    ),
    path(
        "licenses/activate",
        views.ActivateLicenseView.as_view(),
        name="activate-license",
    ),
    path(
        "licenses/renew",
        views.RenewLicenseView.as_view(),
        name="renew-license",
    ),
    path(
        "licenses/deactivate",
        views.DeactivateLicenseView.as_view(),
        name="deactivate-license",
    ),
]
