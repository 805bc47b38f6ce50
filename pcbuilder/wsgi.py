"""WSGI config for the pcbuilder project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "pcbuilder.settings")

application = get_wsgi_application()
