"""
Assets module - the rights registry.

This module handles:
- IPAsset entity, registration and moderation
- LicenseTerms entity, publication and guarded updates
- Ledger registration of new assets (background, best-effort)
"""
