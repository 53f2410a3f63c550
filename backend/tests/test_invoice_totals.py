"""Tests for invoice totals: subtotal, tax, live draft totals."""
from decimal import Decimal

import pytest

from apps.invoices.totals import (
    calculate_draft_totals,
    calculate_totals,
    serialize_totals,
    to_decimal,
)
from apps.invoices.types import InvoiceItem


def item(quantity, rate, description="Item"):
    return InvoiceItem(description=description, quantity=Decimal(quantity), rate=Decimal(rate))


class TestCalculateTotals:
    def test_single_item_with_tax(self):
        totals = calculate_totals([item("2", "10.00")], Decimal("10"))
        assert totals.subtotal == Decimal("20.00")
        assert totals.tax_amount == Decimal("2.00")
        assert totals.total == Decimal("22.00")

    def test_subtotal_is_sum_of_quantity_times_rate(self):
        items = [item("3", "19.99"), item("1", "0.01"), item("12", "7.50")]
        totals = calculate_totals(items, Decimal("0"))
        assert totals.subtotal == Decimal("3") * Decimal("19.99") + Decimal("0.01") + Decimal("90.00")
        assert totals.line_amounts == (Decimal("59.97"), Decimal("0.01"), Decimal("90.00"))

    @pytest.mark.parametrize("tax_rate", ["0", "7.25", "19", "100"])
    def test_tax_and_total_relationship(self, tax_rate):
        items = [item("3", "33.33"), item("1.5", "12")]
        totals = calculate_totals(items, Decimal(tax_rate))
        assert totals.tax_amount == totals.subtotal * Decimal(tax_rate) / 100
        assert totals.total == totals.subtotal + totals.tax_amount

    def test_zero_tax_rate(self):
        totals = calculate_totals([item("4", "25")], Decimal("0"))
        assert totals.tax_amount == 0
        assert totals.total == totals.subtotal

    def test_zero_rate_item_has_zero_amount(self):
        line = item("1", "0")
        assert line.amount == 0
        assert calculate_totals([line], Decimal("10")).total == 0

    def test_amount_follows_quantity_and_rate(self):
        line = item("3", "2.50")
        assert line.amount == Decimal("7.50")


class TestInvoiceRecordTotals:
    def test_record_exposes_derived_totals(self, invoice_record):
        assert invoice_record.subtotal == Decimal("20")
        assert invoice_record.tax_amount == Decimal("2")
        assert invoice_record.total == Decimal("22")

    def test_record_is_immutable(self, invoice_record):
        with pytest.raises(AttributeError):
            invoice_record.tax_rate = Decimal("50")


class TestToDecimal:
    @pytest.mark.parametrize("value", [None, "", "   ", "abc", True, False, "NaN", "Infinity", [], {}])
    def test_unusable_values_count_as_zero(self, value):
        assert to_decimal(value) == 0

    @pytest.mark.parametrize(
        "value,expected",
        [(3, Decimal("3")), (2.5, Decimal("2.5")), ("4.20", Decimal("4.20")), (" 7 ", Decimal("7"))],
    )
    def test_numeric_values(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["1e30", 1e30, 10**30, "-1000000000.5", "1e5000", "1E+999999999", "0.0000001", Decimal("1e-999999")],
    )
    def test_out_of_range_values_count_as_zero(self, value):
        assert to_decimal(value) == 0

    @pytest.mark.parametrize(
        "value,expected",
        [("1e9", Decimal("1000000000")), ("-1e9", Decimal("-1000000000")), ("0.000001", Decimal("0.000001"))],
    )
    def test_limits_are_inclusive(self, value, expected):
        assert to_decimal(value) == expected


class TestDraftTotals:
    def test_half_filled_rows_count_as_zero(self):
        payload = {
            "items": [
                {"description": "Design", "quantity": 2, "rate": "50"},
                {"description": "", "quantity": "", "rate": 30},
                {"description": "Hosting", "quantity": 1},
            ],
            "taxRate": "",
        }
        totals = calculate_draft_totals(payload)
        assert totals.subtotal == Decimal("100")
        assert totals.tax_amount == 0
        assert totals.line_amounts == (Decimal("100"), Decimal("0"), Decimal("0"))

    def test_missing_items(self):
        totals = calculate_draft_totals({"taxRate": 10})
        assert totals.subtotal == 0
        assert totals.total == 0
        assert totals.line_amounts == ()

    def test_non_object_rows_are_ignored_as_zero(self):
        totals = calculate_draft_totals({"items": ["oops", None], "taxRate": 5})
        assert totals.line_amounts == (Decimal("0"), Decimal("0"))

    def test_serialized_totals_have_two_decimals(self):
        totals = calculate_draft_totals(
            {"items": [{"quantity": 2, "rate": 10}], "taxRate": 10}
        )
        assert serialize_totals(totals) == {
            "subtotal": "20.00",
            "taxAmount": "2.00",
            "total": "22.00",
            "lineAmounts": ["20.00"],
        }

    def test_serialized_totals_round_half_up(self):
        totals = calculate_draft_totals(
            {"items": [{"quantity": 1, "rate": "0.05"}], "taxRate": 10}
        )
        # 0.005 tax rounds up to a cent
        assert serialize_totals(totals)["taxAmount"] == "0.01"
        assert serialize_totals(totals)["total"] == "0.06"

    def test_out_of_range_tax_rate_counts_as_zero(self):
        totals = calculate_draft_totals(
            {"items": [{"quantity": 1, "rate": 10}], "taxRate": "250"}
        )
        assert totals.tax_amount == 0
        assert totals.total == Decimal("10")

    def test_huge_rate_serializes(self):
        totals = calculate_draft_totals(
            {"items": [{"quantity": 1, "rate": 1e30}, {"quantity": 1, "rate": 5}], "taxRate": 0}
        )
        assert serialize_totals(totals)["lineAmounts"] == ["0.00", "5.00"]
        assert serialize_totals(totals)["total"] == "5.00"
