"""ASGI config for the pcbuilder project."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "pcbuilder.settings")

application = get_asgi_application()
