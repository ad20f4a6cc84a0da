"""
ASGI config for the bugtracker project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bugtracker.settings")

application = get_asgi_application()
