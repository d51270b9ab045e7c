"""
URL configuration for authorization chain endpoints.
"""

from django.urls import path

from api.v1.verification import views

urlpatterns = [
    path("verify/<str:code>", views.VerifyByCodeView.as_view(), name="verify-by-code"),
    path(
        "products/<uuid:product_id>/authorization-chains",
        views.ChainHistoryView.as_view(),
        name="chain-history",
    ),
    path(
        "authorization-chains/<uuid:chain_id>/revoke",
        views.RevokeChainView.as_view(),
        name="revoke-chain",
    ),
]
