"""Unit tests for VoidInvoice use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.void_invoice import VoidInvoice
from src.app.use_cases.invoicing.dtos import VoidInvoiceCommandDTO
from src.domain.invoice import InvoiceStatus
from src.domain.job_item import ItemStatus
from tests.factories import TENANT_ID, make_invoice, make_job_item, make_line


@pytest.fixture
def invoice():
    return make_invoice()


@pytest.fixture
def item(invoice):
    return make_job_item(status=ItemStatus.SELECTED, lock_invoice_id=invoice.id)


@pytest.fixture
def repos(invoice, item):
    invoice_repo = MagicMock()
    invoice_repo.get_by_id = AsyncMock(return_value=invoice)
    invoice_repo.update = AsyncMock(side_effect=lambda entity: entity)

    line_repo = MagicMock()
    line_repo.get_by_invoice_id = AsyncMock(return_value=[make_line(invoice, item)])

    job_item_repo = MagicMock()
    job_item_repo.get_by_ids = AsyncMock(return_value=[item])
    job_item_repo.update = AsyncMock(side_effect=lambda entity: entity)

    return MagicMock(invoice=invoice_repo, line=line_repo, job_item=job_item_repo)


@pytest.fixture
def void_use_case(mock_uow, repos):
    return VoidInvoice(
        uow=mock_uow,
        invoice_repo=repos.invoice,
        line_repo=repos.line,
        job_item_repo=repos.job_item,
    )


def command(invoice, role="owner"):
    return VoidInvoiceCommandDTO(tenant_id=TENANT_ID, invoice_id=invoice.id, requester_role=role)


@pytest.mark.asyncio
class TestVoidInvoice:
    async def test_owner_voids_draft_and_releases_items(self, void_use_case, repos, invoice, item):
        """
        Given: Draft holding one selected item
        When: The owner voids it
        Then: Invoice void, item back to open and unlocked
        """
        result = await void_use_case.execute(command(invoice))

        assert result.is_ok()
        assert result.value.invoice.status == InvoiceStatus.VOID
        assert result.value.previous_status == InvoiceStatus.DRAFT
        assert result.value.released_job_item_ids == [item.id]
        assert item.status == ItemStatus.OPEN
        assert item.lock is None

    async def test_voiding_issued_invoice_keeps_items_invoiced(self, void_use_case, repos, invoice, item):
        invoice.status = InvoiceStatus.SENT
        invoice.invoice_number = "2025-001"
        item.status = ItemStatus.INVOICED

        result = await void_use_case.execute(command(invoice))

        assert result.is_ok()
        assert result.value.invoice.status == InvoiceStatus.VOID
        assert result.value.invoice.invoice_number == "2025-001"
        assert result.value.released_job_item_ids == []
        assert item.status == ItemStatus.INVOICED
        assert item.lock_invoice_id == invoice.id
        repos.job_item.update.assert_not_called()

    async def test_staff_cannot_void(self, void_use_case, repos, invoice, mock_uow):
        result = await void_use_case.execute(command(invoice, role="staff"))

        assert result.error.code == "VOID_NOT_PERMITTED"
        assert result.error.reason == "authorization_failed"
        assert invoice.status == InvoiceStatus.DRAFT
        repos.invoice.get_by_id.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_void_twice_rejected(self, void_use_case, invoice):
        invoice.status = InvoiceStatus.VOID

        result = await void_use_case.execute(command(invoice))

        assert result.error.code == "INVOICE_ALREADY_VOID"
        assert result.error.reason == "precondition_failed"

    async def test_not_found(self, void_use_case, repos, invoice):
        repos.invoice.get_by_id = AsyncMock(return_value=None)

        result = await void_use_case.execute(command(invoice))

        assert result.error.code == "INVOICE_NOT_FOUND"
