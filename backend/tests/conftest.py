"""Pytest configuration and fixtures."""
import pytest


@pytest.fixture
def invoice_payload():
    """A complete invoice form as the browser submits it."""
    return {
        "invoiceNumber": "INV-1",
        "invoiceDate": "2026-01-15",
        "dueDate": "2026-02-14",
        "fromName": "Acme Studio",
        "fromEmail": "billing@acme.example.com",
        "fromAddress": "1 Main Street",
        "fromCity": "Springfield",
        "fromState": "IL",
        "fromZip": "62701",
        "toName": "Globex Corp",
        "toEmail": "ap@globex.example.com",
        "toAddress": "500 Market Avenue",
        "toCity": "Shelbyville",
        "toState": "IL",
        "toZip": "62565",
        "items": [
            {"description": "Widget", "quantity": 2, "rate": 10.00, "amount": 20.00},
        ],
        "taxRate": 10,
        "paymentTerms": "Net 30",
        "notes": "",
    }


@pytest.fixture
def invoice_record(invoice_payload):
    from apps.invoices.validation import validate_invoice

    return validate_invoice(invoice_payload)
