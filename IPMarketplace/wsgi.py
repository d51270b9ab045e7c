"""
WSGI config for IPMarketplace project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "IPMarketplace.settings.dev")

application = get_wsgi_application()
