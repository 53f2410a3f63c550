"""GraphQL schema for invoices."""
from decimal import Decimal
from typing import List, Optional

import strawberry
from strawberry.scalars import JSON

from apps.invoices.defaults import default_invoice
from apps.invoices.totals import InvoiceTotals, calculate_draft_totals, round_cents
from apps.invoices.types import PAYMENT_TERMS
from apps.invoices.validation import InvoiceValidationError, validate_invoice


@strawberry.type
class InvoiceTotalsType:
    """Derived totals of an invoice, rounded to cents."""

    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    line_amounts: List[Decimal]


@strawberry.type
class ViolationType:
    """A field-level validation problem."""

    field: str
    message: str


@strawberry.type
class InvoiceValidationResult:
    valid: bool
    violations: List[ViolationType] = strawberry.field(default_factory=list)
    totals: Optional[InvoiceTotalsType] = None


def _convert_totals(totals: InvoiceTotals) -> InvoiceTotalsType:
    """Convert InvoiceTotals dataclass to GraphQL type."""
    return InvoiceTotalsType(
        subtotal=round_cents(totals.subtotal),
        tax_amount=round_cents(totals.tax_amount),
        total=round_cents(totals.total),
        line_amounts=[round_cents(amount) for amount in totals.line_amounts],
    )


@strawberry.type
class InvoiceQuery:
    @strawberry.field
    def invoice_defaults(self) -> JSON:
        """Starting values for a new invoice form."""
        return default_invoice()

    @strawberry.field
    def payment_terms_options(self) -> List[str]:
        return list(PAYMENT_TERMS)

    @strawberry.field
    def calculate_invoice_totals(self, input: JSON) -> InvoiceTotalsType:
        """Live totals for a draft; incomplete quantities and rates count as zero."""
        payload = input if isinstance(input, dict) else {}
        return _convert_totals(calculate_draft_totals(payload))

    @strawberry.field
    def validate_invoice(self, input: JSON) -> InvoiceValidationResult:
        """Check a submitted invoice and report every violation at once."""
        try:
            record = validate_invoice(input)
        except InvoiceValidationError as e:
            return InvoiceValidationResult(
                valid=False,
                violations=[
                    ViolationType(field=v.field, message=v.message) for v in e.violations
                ],
            )
        return InvoiceValidationResult(valid=True, totals=_convert_totals(record.totals))
