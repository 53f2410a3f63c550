"""Validation of submitted invoice forms into InvoiceRecord values."""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email

from apps.invoices.totals import (
    MAX_DECIMAL_PLACES,
    MAX_VALUE,
    has_excess_precision,
    is_too_large,
)
from apps.invoices.types import InvoiceItem, InvoiceRecord, Party

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
MAX_TAX_RATE = Decimal("100")

# (wire field suffix, Party attribute, message when missing)
PARTY_FIELDS = (
    ("Name", "name", None),  # see PARTY_NAME_MESSAGES
    ("Email", "email", "Valid email is required"),
    ("Address", "address", "Address is required"),
    ("City", "city", "City is required"),
    ("State", "state", "State is required"),
    ("Zip", "zip", "ZIP code is required"),
)
PARTY_NAME_MESSAGES = {
    "from": "Business name is required",
    "to": "Client name is required",
}


@dataclass(frozen=True)
class Violation:
    """A single field-level problem with a submitted invoice."""

    field: str
    message: str


class InvoiceValidationError(Exception):
    """Raised when a submitted invoice violates one or more field rules."""

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        super().__init__(
            "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        )

    def as_dict(self) -> dict[str, list[str]]:
        """Group messages by field path, preserving field order."""
        grouped: dict[str, list[str]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.field, []).append(violation.message)
        return grouped


class _Collector:
    """Accumulates violations so every field gets checked."""

    def __init__(self):
        self.violations: list[Violation] = []

    def add(self, field: str, message: str) -> None:
        self.violations.append(Violation(field=field, message=message))

    def text(self, payload: Mapping, key: str, message: str, path: str | None = None) -> str:
        value = payload.get(key)
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            self.add(path or key, message)
        return text

    def email(self, payload: Mapping, key: str) -> str:
        value = self.text(payload, key, "Valid email is required")
        if value:
            try:
                validate_email(value)
            except DjangoValidationError:
                self.add(key, "Valid email is required")
        return value

    def calendar_date(self, payload: Mapping, key: str, required_message: str) -> Optional[date]:
        value = self.text(payload, key, required_message)
        if not value:
            return None
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            self.add(key, "Enter a valid date (YYYY-MM-DD)")
            return None

    def number(self, value: Any, path: str, message: str) -> Optional[Decimal]:
        if isinstance(value, bool) or value is None:
            self.add(path, message)
            return None
        if isinstance(value, float):
            value = str(value)
        try:
            number = Decimal(value.strip() if isinstance(value, str) else value)
        except (InvalidOperation, TypeError, ValueError):
            self.add(path, message)
            return None
        if not number.is_finite():
            self.add(path, message)
            return None
        # range checks are left to the caller, precision is only checked in range
        if not is_too_large(number) and has_excess_precision(number):
            self.add(path, f"Use at most {MAX_DECIMAL_PLACES} decimal places")
            return None
        return number


def _parse_party(collector: _Collector, payload: Mapping, prefix: str) -> Party:
    values = {}
    for suffix, attr, message in PARTY_FIELDS:
        key = f"{prefix}{suffix}"
        if attr == "email":
            values[attr] = collector.email(payload, key)
        else:
            values[attr] = collector.text(
                payload, key, message or PARTY_NAME_MESSAGES[prefix]
            )
    return Party(**values)


def _parse_items(collector: _Collector, payload: Mapping) -> list[InvoiceItem]:
    raw_items = payload.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        collector.add("items", "At least one item is required")
        return []

    items = []
    for index, raw in enumerate(raw_items):
        path = f"items.{index}"
        if not isinstance(raw, Mapping):
            collector.add(path, "Item must be an object")
            continue

        description = collector.text(
            raw, "description", "Description is required", path=f"{path}.description"
        )
        quantity = collector.number(
            raw.get("quantity"), f"{path}.quantity", "Quantity must be at least 1"
        )
        if quantity is not None and quantity < 1:
            collector.add(f"{path}.quantity", "Quantity must be at least 1")
            quantity = None
        elif quantity is not None and is_too_large(quantity):
            collector.add(f"{path}.quantity", f"Quantity must not exceed {MAX_VALUE:,}")
            quantity = None
        rate = collector.number(raw.get("rate"), f"{path}.rate", "Rate must be positive")
        if rate is not None and rate < 0:
            collector.add(f"{path}.rate", "Rate must be positive")
            rate = None
        elif rate is not None and is_too_large(rate):
            collector.add(f"{path}.rate", f"Rate must not exceed {MAX_VALUE:,}")
            rate = None

        if description and quantity is not None and rate is not None:
            items.append(InvoiceItem(description=description, quantity=quantity, rate=rate))
    return items


def _parse_tax_rate(collector: _Collector, payload: Mapping) -> Decimal:
    raw = payload.get("taxRate")
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Decimal("0")
    message = "Tax rate must be between 0 and 100"
    tax_rate = collector.number(raw, "taxRate", message)
    if tax_rate is None:
        return Decimal("0")
    if tax_rate < 0 or tax_rate > MAX_TAX_RATE:
        collector.add("taxRate", message)
    return tax_rate


def validate_invoice(payload: Mapping[str, Any]) -> InvoiceRecord:
    """
    Validate a submitted invoice form and build an InvoiceRecord.

    All fields are checked before anything is reported, so the caller
    receives every violation at once.

    Args:
        payload: Form data using the browser field names
            (``invoiceNumber``, ``fromName``, ``items``, ...)

    Returns:
        An immutable InvoiceRecord ready for rendering.

    Raises:
        InvoiceValidationError: If any field is missing or out of range.
    """
    if not isinstance(payload, Mapping):
        raise InvoiceValidationError([Violation("", "Invoice data must be an object")])

    collector = _Collector()

    invoice_number = collector.text(payload, "invoiceNumber", "Invoice number is required")
    invoice_date = collector.calendar_date(payload, "invoiceDate", "Invoice date is required")
    due_date = collector.calendar_date(payload, "dueDate", "Due date is required")
    sender = _parse_party(collector, payload, "from")
    recipient = _parse_party(collector, payload, "to")
    items = _parse_items(collector, payload)
    tax_rate = _parse_tax_rate(collector, payload)
    payment_terms = collector.text(payload, "paymentTerms", "Payment terms are required")

    notes = payload.get("notes")
    notes = notes.strip() if isinstance(notes, str) else ""

    if collector.violations:
        logger.info(
            "Invoice %s rejected with %d violation(s)",
            invoice_number or "<unnumbered>",
            len(collector.violations),
        )
        raise InvoiceValidationError(collector.violations)

    return InvoiceRecord(
        invoice_number=invoice_number,
        invoice_date=invoice_date,
        due_date=due_date,
        sender=sender,
        recipient=recipient,
        items=tuple(items),
        tax_rate=tax_rate,
        payment_terms=payment_terms,
        notes=notes,
    )
