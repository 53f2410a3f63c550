"""Invoice rendering service: InvoiceRecord to HTML to PDF."""
import logging
import re
from decimal import Decimal

from django.conf import settings
from django.template.loader import render_to_string
from django.utils import formats, translation

from apps.invoices.totals import round_cents
from apps.invoices.types import InvoiceRecord

logger = logging.getLogger(__name__)

# Localization labels for invoice PDF
LABELS = {
    "en": {
        "invoice": "INVOICE",
        "invoice_number": "Invoice #",
        "invoice_date": "Date",
        "due_date": "Due Date",
        "from": "From",
        "to": "To",
        "description": "Description",
        "quantity": "Qty",
        "rate": "Rate",
        "amount": "Amount",
        "subtotal": "Subtotal",
        "tax": "Tax",
        "total": "Total",
        "payment_terms": "Payment Terms",
        "notes": "Notes",
    },
    "de": {
        "invoice": "RECHNUNG",
        "invoice_number": "Rechnungsnr.",
        "invoice_date": "Datum",
        "due_date": "Fällig am",
        "from": "Von",
        "to": "An",
        "description": "Beschreibung",
        "quantity": "Menge",
        "rate": "Preis",
        "amount": "Betrag",
        "subtotal": "Zwischensumme",
        "tax": "MwSt.",
        "total": "Gesamtbetrag",
        "payment_terms": "Zahlungsbedingungen",
        "notes": "Hinweise",
    },
}


class RenderFailure(Exception):
    """Raised when an invoice document could not be produced."""


def format_money(value: Decimal, currency_symbol: str) -> str:
    """Format a monetary value with exactly two decimals, e.g. ``$10.00``."""
    amount = round_cents(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):.2f}"


def format_number(value: Decimal) -> str:
    """Format a quantity or percentage without trailing zeros."""
    return format(value.normalize(), "f")


class InvoiceRenderer:
    """Renders a validated InvoiceRecord into a downloadable document."""

    template_name = "invoices/invoice.html"
    content_type = "application/pdf"
    extension = "pdf"

    def __init__(self, language: str | None = None, currency_symbol: str | None = None):
        language = language or settings.INVOICE_DEFAULT_LANGUAGE
        if language not in LABELS:
            language = "en"
        self.language = language
        if currency_symbol is None:
            currency_symbol = settings.INVOICE_CURRENCY_SYMBOL
        self.currency_symbol = currency_symbol

    def build_context(self, record: InvoiceRecord) -> dict:
        """Convert the record into preformatted template values."""
        totals = record.totals

        def money(value):
            return format_money(value, self.currency_symbol)

        with translation.override(self.language):
            invoice_date = formats.date_format(record.invoice_date, "SHORT_DATE_FORMAT")
            due_date = formats.date_format(record.due_date, "SHORT_DATE_FORMAT")

        invoice_dict = {
            "invoice_number": record.invoice_number,
            "invoice_date": invoice_date,
            "due_date": due_date,
            "sender": record.sender,
            "recipient": record.recipient,
            "line_items": [
                {
                    "description": item.description,
                    "quantity": format_number(item.quantity),
                    "rate": money(item.rate),
                    "amount": money(amount),
                }
                for item, amount in zip(record.items, totals.line_amounts)
            ],
            "tax_rate": format_number(record.tax_rate),
            "subtotal": money(totals.subtotal),
            "tax_amount": money(totals.tax_amount),
            "total": money(totals.total),
            "payment_terms": record.payment_terms,
            "notes": record.notes,
        }

        return {
            "invoice": invoice_dict,
            "labels": LABELS[self.language],
            "language": self.language,
        }

    def render_html(self, record: InvoiceRecord) -> str:
        """Render the invoice layout as HTML."""
        return render_to_string(self.template_name, self.build_context(record))

    def generate_pdf(self, record: InvoiceRecord) -> bytes:
        """
        Generate the invoice PDF.

        Rendering is all-or-nothing: any fault while building the document
        surfaces as RenderFailure and no bytes are returned.

        Args:
            record: A validated InvoiceRecord

        Returns:
            PDF file as bytes.
        """
        try:
            html = self.render_html(record)
            content = self._write_pdf(html)
        except Exception as e:
            logger.exception("Failed to render invoice %s", record.invoice_number)
            raise RenderFailure(f"Could not render invoice {record.invoice_number}") from e

        if not content:
            logger.error("PDF engine returned no content for invoice %s", record.invoice_number)
            raise RenderFailure(f"Could not render invoice {record.invoice_number}")

        logger.info(
            "Rendered invoice %s (%d item(s), %d bytes)",
            record.invoice_number,
            record.line_item_count,
            len(content),
        )
        return content

    def _write_pdf(self, html: str) -> bytes:
        from weasyprint import HTML

        return HTML(string=html).render().write_pdf()

    def filename_for(self, record: InvoiceRecord) -> str:
        """Suggested download name, e.g. ``invoice-INV-1.pdf``."""
        return f"invoice-{self._safe_filename(record.invoice_number)}.{self.extension}"

    def _safe_filename(self, name: str) -> str:
        """Convert a name to a safe filename component."""
        # Replace spaces with hyphens, remove special characters
        safe = re.sub(r"[^\w\s-]", "", name)
        safe = re.sub(r"[-\s]+", "-", safe).strip("-")
        return safe[:50] or "draft"
