"""
Celery configuration for background tasks.

Used for ledger issuance, payment reconciliation and notification delivery.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "IPMarketplace.settings.dev")

app = Celery("IPMarketplace")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
