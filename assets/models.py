from assets.infrastructure.models import IPAsset, LicenseTerms  # noqa: F401
