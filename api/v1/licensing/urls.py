"""
URL configuration for licensing endpoints.
"""

from django.urls import path

from api.v1.licensing import views

urlpatterns = [
    path("licenses", views.LicenseApplicationListView.as_view(), name="licenses"),
    path(
        "licenses/<uuid:application_id>",
        views.LicenseApplicationDetailView.as_view(),
        name="license-detail",
    ),
    path(
        "licenses/<uuid:application_id>/approve",
        views.ApproveApplicationView.as_view(),
        name="approve-license",
    ),
    path(
        "licenses/<uuid:application_id>/reject",
        views.RejectApplicationView.as_view(),
        name="reject-license",
    ),
    path(
        "licenses/<uuid:application_id>/revoke",
        views.RevokeLicenseView.as_view(),
        name="revoke-license",
    ),
    path(
        "licenses/<uuid:application_id>/verify",
        views.VerifyLicenseView.as_view(),
        name="verify-license",
    ),
]
