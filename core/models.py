from core.infrastructure.models import AuditLog, IdempotencyKey  # noqa: F401
