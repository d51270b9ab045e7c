"""
Payment models for Django.

Models live in payments.infrastructure.models; re-exported here so
Django registers them with the app.
"""
from payments.infrastructure.models import Transaction  # noqa: F401
