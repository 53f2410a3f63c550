"""GraphQL tests for invoice totals and validation."""
from config.schema import schema


def run_graphql(query, variables=None):
    """Helper to run GraphQL queries synchronously."""
    return schema.execute_sync(query, variable_values=variables)


TOTALS_QUERY = """
query Totals($input: JSON!) {
  calculateInvoiceTotals(input: $input) {
    subtotal
    taxAmount
    total
    lineAmounts
  }
}
"""

VALIDATE_QUERY = """
query Validate($input: JSON!) {
  validateInvoice(input: $input) {
    valid
    violations { field message }
    totals { subtotal taxAmount total }
  }
}
"""


class TestInvoiceQueries:
    def test_health(self):
        result = run_graphql("{ health }")
        assert result.errors is None
        assert result.data == {"health": "ok"}

    def test_payment_terms_options(self):
        result = run_graphql("{ paymentTermsOptions }")
        assert result.data["paymentTermsOptions"] == ["Net 15", "Net 30", "Net 60", "Due on Receipt"]

    def test_invoice_defaults(self):
        result = run_graphql("{ invoiceDefaults }")
        assert result.errors is None
        assert result.data["invoiceDefaults"]["paymentTerms"] == "Net 30"

    def test_calculate_totals(self):
        result = run_graphql(
            TOTALS_QUERY,
            {"input": {"items": [{"quantity": 2, "rate": 10}], "taxRate": 10}},
        )
        assert result.errors is None
        assert result.data["calculateInvoiceTotals"] == {
            "subtotal": "20.00",
            "taxAmount": "2.00",
            "total": "22.00",
            "lineAmounts": ["20.00"],
        }

    def test_calculate_totals_ignores_out_of_range_values(self):
        result = run_graphql(
            TOTALS_QUERY,
            {"input": {"items": [{"quantity": 1, "rate": "1e30"}, {"quantity": 1, "rate": 4}], "taxRate": "1e5000"}},
        )
        assert result.errors is None
        assert result.data["calculateInvoiceTotals"] == {
            "subtotal": "4.00",
            "taxAmount": "0.00",
            "total": "4.00",
            "lineAmounts": ["0.00", "4.00"],
        }


class TestValidateInvoiceQuery:
    def test_valid_invoice(self, invoice_payload):
        result = run_graphql(VALIDATE_QUERY, {"input": invoice_payload})
        assert result.errors is None
        data = result.data["validateInvoice"]
        assert data["valid"] is True
        assert data["violations"] == []
        assert data["totals"] == {"subtotal": "20.00", "taxAmount": "2.00", "total": "22.00"}

    def test_invalid_invoice_reports_all_fields(self, invoice_payload):
        invoice_payload["fromName"] = ""
        invoice_payload["toEmail"] = "bad"
        invoice_payload["items"] = []
        result = run_graphql(VALIDATE_QUERY, {"input": invoice_payload})
        assert result.errors is None
        data = result.data["validateInvoice"]
        assert data["valid"] is False
        assert data["totals"] is None
        assert {v["field"] for v in data["violations"]} == {"fromName", "toEmail", "items"}
