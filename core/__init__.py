"""
Core module - shared kernel of the marketplace.

This module contains:
- Domain exceptions, events and value objects used by every context
- The in-process event bus and the Celery-backed event handlers
- Audit log, idempotency keys and notifier adapters
- Observability, metrics and account-context middleware
"""
