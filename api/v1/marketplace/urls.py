"""
URL configuration for marketplace endpoints.
"""

from django.urls import path

from api.v1.marketplace import views

urlpatterns = [
    path("products", views.ProductListView.as_view(), name="create-product"),
    path("products/<uuid:product_id>", views.ProductDetailView.as_view(), name="product-detail"),
    path(
        "products/<uuid:product_id>/status",
        views.ProductStatusView.as_view(),
        name="product-status",
    ),
    path(
        "products/<uuid:product_id>/purchase",
        views.PurchaseProductView.as_view(),
        name="purchase-product",
    ),
    path(
        "transactions/<uuid:transaction_id>",
        views.TransactionDetailView.as_view(),
        name="transaction-detail",
    ),
    path(
        "transactions/<uuid:transaction_id>/refund",
        views.RefundTransactionView.as_view(),
        name="refund-transaction",
    ),
]
