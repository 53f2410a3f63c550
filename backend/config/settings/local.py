"""Local development settings."""
from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# CORS - allow the invoice form dev server
CORS_ALLOW_ALL_ORIGINS = True

# Additional apps for development
INSTALLED_APPS += [  # noqa: F405
    "django_extensions",
]
