"""
Product models for Django.

Models live in products.infrastructure.models; re-exported here so
Django registers them with the app.
"""
from products.infrastructure.models import Product  # noqa: F401
