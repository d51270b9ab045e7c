"""
ASGI config for IPMarketplace project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "IPMarketplace.settings.dev")

application = get_asgi_application()
