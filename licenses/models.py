from licenses.infrastructure.models import LicenseApplication  # noqa: F401
