"""
URL configuration for API v1.
"""

from django.urls import include, path

urlpatterns = [
    path("", include("api.v1.registry.urls")),
    path("", include("api.v1.licensing.urls")),
    path("", include("api.v1.marketplace.urls")),
    path("", include("api.v1.verification.urls")),
]
