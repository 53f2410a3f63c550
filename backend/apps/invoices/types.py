"""Invoice data classes for the record handed to the renderer."""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from apps.invoices.totals import InvoiceTotals, calculate_totals, line_amount

PAYMENT_TERMS = ("Net 15", "Net 30", "Net 60", "Due on Receipt")
DEFAULT_PAYMENT_TERMS = "Net 30"


@dataclass(frozen=True)
class InvoiceItem:
    """A billable line on an invoice."""

    description: str
    quantity: Decimal
    rate: Decimal

    @property
    def amount(self) -> Decimal:
        """Line amount, always derived from quantity and rate."""
        return line_amount(self.quantity, self.rate)


@dataclass(frozen=True)
class Party:
    """Sender or recipient address block."""

    name: str
    email: str
    address: str
    city: str
    state: str
    zip: str

    @property
    def city_line(self) -> str:
        return f"{self.city}, {self.state} {self.zip}"


@dataclass(frozen=True)
class InvoiceRecord:
    """A complete, validated invoice.

    Derived totals are recomputed on every read, so they always match
    ``items`` and ``tax_rate``.
    """

    invoice_number: str
    invoice_date: date
    due_date: date
    sender: Party
    recipient: Party
    items: tuple[InvoiceItem, ...] = field(default_factory=tuple)
    tax_rate: Decimal = Decimal("0")
    payment_terms: str = DEFAULT_PAYMENT_TERMS
    notes: str = ""

    @property
    def totals(self) -> InvoiceTotals:
        return calculate_totals(self.items, self.tax_rate)

    @property
    def subtotal(self) -> Decimal:
        return self.totals.subtotal

    @property
    def tax_amount(self) -> Decimal:
        return self.totals.tax_amount

    @property
    def total(self) -> Decimal:
        return self.totals.total

    @property
    def line_item_count(self) -> int:
        """Return number of line items."""
        return len(self.items)
