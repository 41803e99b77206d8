"""Unit tests for monetary and tax math"""

import pytest
from decimal import Decimal
from src.domain.money import (
    LineAmounts,
    aggregate_totals,
    balance_due,
    compute_line,
    format_minor_units,
    format_tax_rate,
    line_subtotal,
    line_tax,
    line_total,
)
from src.domain.job_item import BillableUnit, billable_unit_label


class TestLineAmounts:
    """Per-line subtotal, tax and total"""

    def test_subtotal_is_quantity_times_price(self):
        assert line_subtotal(Decimal("2"), 10000) == 20000

    @pytest.mark.parametrize(
        "quantity, price, expected",
        [
            (Decimal("1.5"), 333, 500),       # 499.5 rounds up
            (Decimal("0.333333"), 100, 33),   # 33.3333 rounds down
            (Decimal("0.5"), 1, 1),           # 0.5 rounds half up
            (Decimal("3"), 0, 0),
        ],
    )
    def test_subtotal_rounds_half_up(self, quantity, price, expected):
        assert line_subtotal(quantity, price) == expected

    def test_tax_applies_rate_to_subtotal(self):
        assert line_tax(20000, True, Decimal("0.1")) == 2000

    def test_tax_rounds_half_up(self):
        # 1005 * 0.1 = 100.5
        assert line_tax(1005, True, Decimal("0.1")) == 101

    def test_no_tax_when_not_applicable(self):
        assert line_tax(20000, False, Decimal("0.1")) == 0

    def test_no_tax_when_rate_is_zero(self):
        assert line_tax(20000, True, Decimal("0")) == 0

    def test_total_is_subtotal_plus_tax(self):
        assert line_total(20000, 2000) == 22000

    def test_compute_line_two_hours_at_ten_percent(self):
        """qty 2 x 10000 at 10% -> 20000 / 2000 / 22000"""
        amounts = compute_line(Decimal("2"), 10000, True, Decimal("0.10"))

        assert amounts.subtotal_minor == 20000
        assert amounts.tax_minor == 2000
        assert amounts.total_minor == 22000
        assert amounts.tax_rate == Decimal("0.10")

    def test_compute_line_untaxed_has_zero_effective_rate(self):
        amounts = compute_line(Decimal("1"), 5000, False, Decimal("0.10"))

        assert amounts.tax_rate == Decimal("0")
        assert amounts.tax_minor == 0
        assert amounts.total_minor == 5000


class TestAggregateTotals:
    """Invoice-level sums and tax breakdown"""

    def test_empty_lines_give_zero_totals(self):
        totals = aggregate_totals([])

        assert totals.subtotal_minor == 0
        assert totals.tax_minor == 0
        assert totals.total_minor == 0
        assert totals.tax_breakdown == []

    def test_breakdown_groups_by_rate_in_first_appearance_order(self):
        # Arrange
        lines = [
            LineAmounts(tax_rate=Decimal("0.15"), subtotal_minor=1000, tax_minor=150),
            LineAmounts(tax_rate=Decimal("0.1"), subtotal_minor=20000, tax_minor=2000),
            LineAmounts(tax_rate=Decimal("0"), subtotal_minor=5000, tax_minor=0),
            LineAmounts(tax_rate=Decimal("0.10"), subtotal_minor=1000, tax_minor=100),
        ]

        # Act
        totals = aggregate_totals(lines)

        # Assert
        assert totals.subtotal_minor == 27000
        assert totals.tax_minor == 2250
        assert totals.total_minor == 29250
        assert [entry.rate for entry in totals.tax_breakdown] == [Decimal("0.15"), Decimal("0.1")]
        assert totals.tax_breakdown[0].taxable_amount_minor == 1000
        assert totals.tax_breakdown[0].tax_minor == 150
        assert totals.tax_breakdown[1].taxable_amount_minor == 21000
        assert totals.tax_breakdown[1].tax_minor == 2100

    def test_untaxed_lines_count_toward_subtotal_only(self):
        lines = [LineAmounts(tax_rate=Decimal("0"), subtotal_minor=5000, tax_minor=0)]

        totals = aggregate_totals(lines)

        assert totals.subtotal_minor == 5000
        assert totals.tax_breakdown == []

    def test_breakdown_entry_round_trips_through_json_dict(self):
        totals = aggregate_totals(
            [LineAmounts(tax_rate=Decimal("0.1"), subtotal_minor=20000, tax_minor=2000)]
        )
        entry = totals.tax_breakdown[0]

        data = entry.to_dict()

        assert data == {"rate": "0.1", "taxable_amount_minor": 20000, "tax_minor": 2000}
        assert type(entry).from_dict(data) == entry


class TestBalanceAndFormatting:
    def test_balance_due(self):
        assert balance_due(22000, 2000) == 20000
        assert balance_due(22000, 22000) == 0

    @pytest.mark.parametrize(
        "minor, currency, expected",
        [
            (123456, "AUD", "$1,234.56"),
            (5, "AUD", "$0.05"),
            (-500, "AUD", "-$5.00"),
            (100, "EUR", "€1.00"),
            (100, "JPY", "JPY 1.00"),
        ],
    )
    def test_format_minor_units(self, minor, currency, expected):
        assert format_minor_units(minor, currency) == expected

    def test_format_tax_rate(self):
        assert format_tax_rate(Decimal("0.1")) == "10%"
        assert format_tax_rate(Decimal("0.15")) == "15%"
        assert format_tax_rate(Decimal("0")) == "0%"

    def test_billable_unit_labels(self):
        assert billable_unit_label(BillableUnit.HOUR, Decimal("1")) == "hour"
        assert billable_unit_label(BillableUnit.HOUR, Decimal("2.5")) == "hours"
        assert billable_unit_label(BillableUnit.HALF_DAY, Decimal("1")) == "half day"
        assert billable_unit_label(BillableUnit.DAY, Decimal("3")) == "days"
        assert billable_unit_label(BillableUnit.EXPENSE, Decimal("1")) == "-"
