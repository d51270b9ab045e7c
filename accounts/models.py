from accounts.infrastructure.models import Account  # noqa: F401
