"""Unit tests for the Invoice aggregate"""

import pytest
from datetime import datetime, date
from decimal import Decimal
from src.domain.errors import PreconditionFailedError, ValidationFailedError
from src.domain.invoice import (
    Invoice,
    InvoiceStatus,
    derive_payment_status,
    format_invoice_display_number,
    generate_invoice_code,
    generate_public_token,
)
from tests.factories import make_invoice, make_job_item, make_line

ISSUED_AT = datetime(2025, 2, 1, 12, 0, 0)


def issued_invoice(total_items: int = 1, due_date: date = date(2025, 3, 1)) -> Invoice:
    invoice = make_invoice(due_date=due_date)
    lines = [make_line(invoice, make_job_item(), position=i) for i in range(total_items)]
    invoice.apply_lines(lines)
    invoice.issue("2025-001", "user_456", ISSUED_AT, line_count=len(lines))
    return invoice


class TestDraftCreation:
    def test_new_invoice_is_empty_draft(self):
        invoice = make_invoice()

        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.invoice_number is None
        assert invoice.total_minor == 0
        assert invoice.balance_due_minor == 0
        assert invoice.tax_breakdown == []
        assert len(invoice.public_token) == 64

    def test_public_tokens_are_unique_hex(self):
        tokens = {generate_public_token() for _ in range(50)}

        assert len(tokens) == 50
        assert all(int(token, 16) >= 0 for token in tokens)

    def test_display_number_format(self):
        code = generate_invoice_code()

        assert len(code) == 5
        assert code == code.upper()
        assert format_invoice_display_number("qnts", code) == f"QNTS-{code}"


class TestApplyLines:
    def test_totals_follow_lines(self):
        """qty 2 x 10000 at 10% -> 20000 / 2000 / 22000, balance 22000"""
        invoice = make_invoice()
        line = make_line(invoice, make_job_item(quantity="2", unit_price_minor=10000))

        invoice.apply_lines([line])

        assert invoice.subtotal_minor == 20000
        assert invoice.tax_minor == 2000
        assert invoice.total_minor == 22000
        assert invoice.balance_due_minor == 22000
        assert invoice.tax_breakdown == [
            {"rate": "0.1", "taxable_amount_minor": 20000, "tax_minor": 2000}
        ]

    def test_removing_all_lines_returns_to_zero(self):
        invoice = make_invoice()
        invoice.apply_lines([make_line(invoice, make_job_item())])

        invoice.apply_lines([])

        assert invoice.total_minor == 0
        assert invoice.balance_due_minor == 0
        assert invoice.breakdown() == []


class TestIssue:
    def test_issue_assigns_number_and_sends(self):
        invoice = issued_invoice()

        assert invoice.status == InvoiceStatus.SENT
        assert invoice.invoice_number == "2025-001"
        assert invoice.issue_date == ISSUED_AT
        assert invoice.issued_by == "user_456"

    def test_issue_empty_invoice_fails(self):
        invoice = make_invoice()

        with pytest.raises(PreconditionFailedError) as exc_info:
            invoice.issue("2025-001", "user_456", ISSUED_AT, line_count=0)

        assert exc_info.value.code == "INVOICE_HAS_NO_LINES"
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.invoice_number is None

    def test_issue_twice_fails(self):
        invoice = issued_invoice()

        with pytest.raises(PreconditionFailedError) as exc_info:
            invoice.issue("2025-002", "user_456", ISSUED_AT, line_count=1)

        assert exc_info.value.code == "INVOICE_NOT_DRAFT"
        assert invoice.invoice_number == "2025-001"


class TestPayment:
    def test_full_payment_marks_paid(self):
        invoice = issued_invoice()

        invoice.record_payment(22000, today=date(2025, 2, 10))

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.balance_due_minor == 0

    def test_part_payment_marks_partially_paid(self):
        invoice = issued_invoice()

        invoice.record_payment(5000, today=date(2025, 2, 10))

        assert invoice.status == InvoiceStatus.PARTIALLY_PAID
        assert invoice.balance_due_minor == 17000

    def test_zero_payment_past_due_marks_overdue(self):
        invoice = issued_invoice(due_date=date(2025, 3, 1))

        invoice.record_payment(0, today=date(2025, 3, 2))

        assert invoice.status == InvoiceStatus.OVERDUE

    def test_payment_reset_to_zero_before_due_returns_to_sent(self):
        invoice = issued_invoice()
        invoice.record_payment(5000, today=date(2025, 2, 10))

        invoice.record_payment(0, today=date(2025, 2, 11))

        assert invoice.status == InvoiceStatus.SENT

    def test_payment_reset_on_viewed_invoice_returns_to_viewed(self):
        invoice = issued_invoice()
        invoice.mark_viewed(datetime(2025, 2, 2))
        invoice.record_payment(5000, today=date(2025, 2, 10))

        invoice.record_payment(0, today=date(2025, 2, 11))

        assert invoice.status == InvoiceStatus.VIEWED

    @pytest.mark.parametrize("amount", [-1, 22001])
    def test_out_of_range_payment_rejected(self, amount):
        invoice = issued_invoice()

        with pytest.raises(ValidationFailedError) as exc_info:
            invoice.record_payment(amount, today=date(2025, 2, 10))

        assert exc_info.value.code == "INVALID_PAYMENT_AMOUNT"
        assert invoice.amount_paid_minor == 0
        assert invoice.balance_due_minor == 22000

    @pytest.mark.parametrize("status", [InvoiceStatus.DRAFT, InvoiceStatus.VOID])
    def test_payment_on_draft_or_void_rejected(self, status):
        invoice = make_invoice(status=status)

        with pytest.raises(PreconditionFailedError) as exc_info:
            invoice.record_payment(0, today=date(2025, 2, 10))

        assert exc_info.value.code == "INVOICE_NOT_PAYABLE"

    def test_balance_invariant_holds_through_payments(self):
        invoice = issued_invoice(total_items=3)
        for amount in [0, 1, 30000, 66000, 12345, 0]:
            invoice.record_payment(amount, today=date(2025, 2, 10))
            assert invoice.balance_due_minor == invoice.total_minor - invoice.amount_paid_minor
            assert 0 <= invoice.amount_paid_minor <= invoice.total_minor


class TestDerivePaymentStatus:
    @pytest.mark.parametrize(
        "current, paid, today, viewed, expected",
        [
            (InvoiceStatus.SENT, 100, date(2025, 1, 1), False, InvoiceStatus.PAID),
            (InvoiceStatus.OVERDUE, 100, date(2025, 9, 1), False, InvoiceStatus.PAID),
            (InvoiceStatus.SENT, 50, date(2025, 9, 1), False, InvoiceStatus.PARTIALLY_PAID),
            (InvoiceStatus.SENT, 0, date(2025, 9, 1), False, InvoiceStatus.OVERDUE),
            (InvoiceStatus.VIEWED, 0, date(2025, 9, 1), True, InvoiceStatus.OVERDUE),
            (InvoiceStatus.SENT, 0, date(2025, 3, 1), False, InvoiceStatus.SENT),
            (InvoiceStatus.PAID, 0, date(2025, 1, 1), True, InvoiceStatus.VIEWED),
            (InvoiceStatus.DRAFT, 100, date(2025, 1, 1), False, InvoiceStatus.DRAFT),
            (InvoiceStatus.VOID, 100, date(2025, 1, 1), False, InvoiceStatus.VOID),
        ],
    )
    def test_derivation(self, current, paid, today, viewed, expected):
        status = derive_payment_status(current, 100, paid, date(2025, 3, 1), today, viewed=viewed)

        assert status == expected

    def test_no_due_date_never_overdue(self):
        status = derive_payment_status(InvoiceStatus.SENT, 100, 0, None, date(2030, 1, 1))

        assert status == InvoiceStatus.SENT


class TestVoidAndViewed:
    def test_void_returns_previous_status(self):
        invoice = issued_invoice()

        previous = invoice.void()

        assert previous == InvoiceStatus.SENT
        assert invoice.status == InvoiceStatus.VOID

    def test_void_twice_fails(self):
        invoice = make_invoice()
        invoice.void()

        with pytest.raises(PreconditionFailedError) as exc_info:
            invoice.void()

        assert exc_info.value.code == "INVOICE_ALREADY_VOID"

    def test_void_is_terminal_for_payments(self):
        invoice = issued_invoice()
        invoice.void()

        with pytest.raises(PreconditionFailedError):
            invoice.record_payment(22000, today=date(2025, 2, 10))

        assert invoice.status == InvoiceStatus.VOID

    def test_mark_viewed_only_from_sent(self):
        invoice = issued_invoice()
        viewed_at = datetime(2025, 2, 2, 8, 30)

        assert invoice.mark_viewed(viewed_at) is True
        assert invoice.status == InvoiceStatus.VIEWED
        assert invoice.viewed_at == viewed_at

        assert invoice.mark_viewed(datetime(2025, 2, 3)) is False
        assert invoice.viewed_at == viewed_at

    @pytest.mark.parametrize("status", [InvoiceStatus.DRAFT, InvoiceStatus.PAID, InvoiceStatus.VOID])
    def test_mark_viewed_is_noop_outside_sent(self, status):
        invoice = make_invoice(status=status)

        assert invoice.mark_viewed(datetime(2025, 2, 2)) is False
        assert invoice.status == status
        assert invoice.viewed_at is None


class TestOverdue:
    def test_refresh_overdue_past_due(self):
        invoice = issued_invoice(due_date=date(2025, 3, 1))

        assert invoice.refresh_overdue(date(2025, 3, 2)) is True
        assert invoice.status == InvoiceStatus.OVERDUE
        assert invoice.days_overdue(date(2025, 3, 11)) == 10

    def test_refresh_overdue_on_due_date_is_noop(self):
        invoice = issued_invoice(due_date=date(2025, 3, 1))

        assert invoice.refresh_overdue(date(2025, 3, 1)) is False
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.days_overdue(date(2025, 3, 1)) == 0

    def test_refresh_overdue_ignores_partially_paid(self):
        invoice = issued_invoice(due_date=date(2025, 3, 1))
        invoice.record_payment(100, today=date(2025, 2, 10))

        assert invoice.refresh_overdue(date(2025, 4, 1)) is False
        assert invoice.status == InvoiceStatus.PARTIALLY_PAID

    def test_is_overdue(self):
        invoice = issued_invoice(due_date=date(2025, 3, 1))

        assert invoice.is_overdue(date(2025, 3, 2)) is True
        assert invoice.is_overdue(date(2025, 3, 1)) is False
        assert make_invoice(due_date=date(2025, 3, 1)).is_overdue(date(2025, 4, 1)) is False
