"""
URL configuration for registry endpoints.
"""

from django.urls import path

from api.v1.registry import views

urlpatterns = [
    path("assets", views.AssetListView.as_view(), name="register-asset"),
    path("assets/<uuid:asset_id>", views.AssetDetailView.as_view(), name="asset-detail"),
    path(
        "assets/<uuid:asset_id>/moderation",
        views.ModerateAssetView.as_view(),
        name="moderate-asset",
    ),
    path("assets/<uuid:asset_id>/terms", views.AssetTermsView.as_view(), name="asset-terms"),
    path("terms/<uuid:terms_id>", views.TermsDetailView.as_view(), name="terms-detail"),
]
