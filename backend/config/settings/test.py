"""Test settings."""
from .base import *  # noqa: F401, F403

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

INVOICE_CURRENCY_SYMBOL = "$"
INVOICE_DEFAULT_LANGUAGE = "en"
