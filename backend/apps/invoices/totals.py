"""Totals calculation for invoice line items and tax."""
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")

# Bounds for quantities, rates and tax rates. Keeps every derived amount
# well inside the 28 significant digits of the default decimal context.
MAX_VALUE = Decimal("1000000000")
MAX_DECIMAL_PLACES = 6
SMALLEST_UNIT = Decimal(1).scaleb(-MAX_DECIMAL_PLACES)


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived monetary values of an invoice."""

    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    line_amounts: tuple[Decimal, ...] = field(default_factory=tuple)


def is_too_large(number: Decimal) -> bool:
    # copy_abs ignores the context, so huge exponents cannot overflow here
    return number.copy_abs() > MAX_VALUE


def has_excess_precision(number: Decimal) -> bool:
    """True if ``number`` has more than MAX_DECIMAL_PLACES significant decimals."""
    return number != number.quantize(SMALLEST_UNIT)


def within_limits(number: Decimal) -> bool:
    if not number.is_finite() or is_too_large(number):
        return False
    return not has_excess_precision(number)


def round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a form value to Decimal, treating anything unusable as zero.

    Used for running totals while the form is still being edited, where
    quantity or rate may be empty or half-typed. Values beyond
    MAX_VALUE or with more than MAX_DECIMAL_PLACES decimals count as zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, int):
        value = Decimal(value)
    if isinstance(value, Decimal):
        return value if within_limits(value) else ZERO
    if isinstance(value, float):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return ZERO
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return ZERO
    return number if within_limits(number) else ZERO


def line_amount(quantity: Decimal, rate: Decimal) -> Decimal:
    return quantity * rate


def calculate_totals(items: Iterable, tax_rate: Decimal) -> InvoiceTotals:
    """
    Calculate subtotal, tax and total from line items.

    Line amounts are recomputed from quantity and rate rather than read
    from any stored amount.

    Args:
        items: Objects with ``quantity`` and ``rate`` attributes
        tax_rate: Tax percentage, e.g. Decimal("19")

    Returns:
        InvoiceTotals with unrounded values.
    """
    amounts = tuple(line_amount(item.quantity, item.rate) for item in items)
    subtotal = sum(amounts, ZERO)
    tax_amount = subtotal * tax_rate / HUNDRED
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
        line_amounts=amounts,
    )


@dataclass(frozen=True)
class _DraftItem:
    quantity: Decimal
    rate: Decimal


def calculate_draft_totals(payload: Mapping[str, Any]) -> InvoiceTotals:
    """Calculate live totals for a possibly incomplete form payload."""
    raw_items = payload.get("items") or []
    if not isinstance(raw_items, list):
        raw_items = []

    items = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            raw = {}
        items.append(
            _DraftItem(
                quantity=to_decimal(raw.get("quantity")),
                rate=to_decimal(raw.get("rate")),
            )
        )

    tax_rate = to_decimal(payload.get("taxRate"))
    if tax_rate < ZERO or tax_rate > HUNDRED:
        tax_rate = ZERO
    return calculate_totals(items, tax_rate)


def serialize_totals(totals: InvoiceTotals) -> dict:
    """Totals as two-decimal strings keyed by the browser field names."""
    return {
        "subtotal": str(round_cents(totals.subtotal)),
        "taxAmount": str(round_cents(totals.tax_amount)),
        "total": str(round_cents(totals.total)),
        "lineAmounts": [str(round_cents(amount)) for amount in totals.line_amounts],
    }
