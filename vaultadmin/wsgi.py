"""
WSGI config for vaultadmin.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "vaultadmin.settings.dev")

application = get_wsgi_application()
