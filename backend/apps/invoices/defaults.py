"""Starting values for a new invoice form."""
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from apps.invoices.types import DEFAULT_PAYMENT_TERMS

DEFAULT_DUE_DAYS = 30


def default_invoice(today: date | None = None, now: datetime | None = None) -> dict:
    """
    Return the draft a new invoice form starts from.

    The invoice number is derived from the current time in milliseconds,
    so it is unique enough for a single user but not guaranteed globally.
    """
    if now is None:
        now = datetime.now()
    if today is None:
        today = now.date()

    return {
        "invoiceNumber": f"INV-{int(now.timestamp() * 1000)}",
        "invoiceDate": today.isoformat(),
        "dueDate": (today + relativedelta(days=DEFAULT_DUE_DAYS)).isoformat(),
        "items": [{"description": "", "quantity": 1, "rate": 0, "amount": 0}],
        "taxRate": 0,
        "paymentTerms": DEFAULT_PAYMENT_TERMS,
        "notes": "",
    }
