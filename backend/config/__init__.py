"""Django project configuration for invoice-builder."""
