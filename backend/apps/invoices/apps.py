"""Invoices app configuration."""

from django.apps import AppConfig


class InvoicesConfig(AppConfig):
    """Configuration for the invoices app."""

    name = "apps.invoices"
    verbose_name = "Invoices"
