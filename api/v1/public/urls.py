"""
URL configuration for public license API endpoints.
"""

from django.urls import path

from api.v1.public import views

urlpatterns = [
    path(
        "licenses/validate",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
    path(
        "licenses/<str:key>",
        views.LicenseInfoView.as_view(),
        name="license-info",
    ),
]
