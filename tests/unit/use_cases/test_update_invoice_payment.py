"""Unit tests for UpdateInvoicePayment use case"""

import pytest
from datetime import datetime, date
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.update_invoice_payment import UpdateInvoicePayment
from src.app.use_cases.invoicing.dtos import UpdatePaymentCommandDTO
from src.domain.invoice import InvoiceStatus
from tests.factories import TENANT_ID, make_invoice, make_job_item, make_line


@pytest.fixture
def issued():
    invoice = make_invoice(
        status=InvoiceStatus.SENT, invoice_number="2025-001", due_date=date(2025, 3, 1)
    )
    invoice.apply_lines([make_line(invoice, make_job_item())])
    return invoice


@pytest.fixture
def mock_invoice_repo(issued):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=issued)
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def mock_line_repo():
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=[])
    return repo


def use_case_at(mock_uow, mock_invoice_repo, mock_line_repo, today: date):
    return UpdateInvoicePayment(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        line_repo=mock_line_repo,
        clock=lambda: datetime(today.year, today.month, today.day, 12, 0, 0),
    )


def command(invoice, amount):
    return UpdatePaymentCommandDTO(tenant_id=TENANT_ID, invoice_id=invoice.id, amount_paid_minor=amount)


@pytest.mark.asyncio
class TestUpdatePayment:
    @pytest.mark.parametrize(
        "amount, expected_status, expected_balance",
        [
            (22000, InvoiceStatus.PAID, 0),
            (5000, InvoiceStatus.PARTIALLY_PAID, 17000),
            (0, InvoiceStatus.SENT, 22000),
        ],
    )
    async def test_status_follows_amount_before_due(
        self, mock_uow, mock_invoice_repo, mock_line_repo, issued, amount, expected_status, expected_balance
    ):
        use_case = use_case_at(mock_uow, mock_invoice_repo, mock_line_repo, date(2025, 2, 1))

        result = await use_case.execute(command(issued, amount))

        assert result.is_ok()
        assert result.value.status == expected_status
        assert result.value.amount_paid_minor == amount
        assert result.value.balance_due_minor == expected_balance
        mock_uow.commit.assert_called_once()

    async def test_unpaid_past_due_is_overdue(self, mock_uow, mock_invoice_repo, mock_line_repo, issued):
        use_case = use_case_at(mock_uow, mock_invoice_repo, mock_line_repo, date(2025, 3, 2))

        result = await use_case.execute(command(issued, 0))

        assert result.value.status == InvoiceStatus.OVERDUE

    async def test_payment_above_total_rejected(self, mock_uow, mock_invoice_repo, mock_line_repo, issued):
        use_case = use_case_at(mock_uow, mock_invoice_repo, mock_line_repo, date(2025, 2, 1))

        result = await use_case.execute(command(issued, 22001))

        assert result.error.code == "INVALID_PAYMENT_AMOUNT"
        assert result.error.reason == "validation_failed"
        assert issued.amount_paid_minor == 0
        mock_invoice_repo.update.assert_not_called()

    async def test_negative_payment_rejected(self, mock_uow, mock_invoice_repo, mock_line_repo, issued):
        use_case = use_case_at(mock_uow, mock_invoice_repo, mock_line_repo, date(2025, 2, 1))

        result = await use_case.execute(command(issued, -1))

        assert result.error.code == "INVALID_PAYMENT_AMOUNT"

    @pytest.mark.parametrize("status", [InvoiceStatus.DRAFT, InvoiceStatus.VOID])
    async def test_draft_and_void_not_payable(
        self, mock_uow, mock_invoice_repo, mock_line_repo, issued, status
    ):
        issued.status = status
        use_case = use_case_at(mock_uow, mock_invoice_repo, mock_line_repo, date(2025, 2, 1))

        result = await use_case.execute(command(issued, 100))

        assert result.error.code == "INVOICE_NOT_PAYABLE"
        assert result.error.reason == "precondition_failed"
