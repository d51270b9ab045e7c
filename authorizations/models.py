"""
Authorization models for Django.

Models live in authorizations.infrastructure.models; re-exported here so
Django registers them with the app.
"""
from authorizations.infrastructure.models import AuthorizationChain, LedgerEntry  # noqa: F401
