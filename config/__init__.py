"""Top-level package for Django configuration.

Settings modules for the different environments plus the WSGI, ASGI and
Celery entry points of the coworking platform.
"""

# Import the Celery application as soon as Django starts so that shared
# tasks are bound to it.
from .celery import app as celery_app  # noqa: F401
