"""Integration tests for OverdueSweepWorker against a real database"""

import pytest
from datetime import date

from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.invoice import InvoiceStatus
from src.worker.overdue_sweeper import OverdueSweepWorker
from tests.integration.workflow import Invoicing, seed_catalog


@pytest.mark.asyncio
class TestOverdueSweepIntegration:
    async def test_sweep_marks_only_unpaid_past_due(self, db_session: AsyncSession, session_factory):
        """
        Given: Issued invoices: unpaid past due, partially paid past due,
               unpaid not yet due, and a past-due draft
        When: The sweep runs as of 2025-02-01
        Then: Only the unpaid past-due invoice becomes overdue; a rerun changes nothing
        """
        # Arrange
        catalog = await seed_catalog(db_session, item_count=4)
        invoicing = Invoicing(db_session)
        due = date(2025, 1, 31)

        async def issued_with(item_id, due_date):
            draft = (await invoicing.create_draft(catalog.client_id, due_date=due_date)).value
            await invoicing.add_items(draft.id, [item_id])
            return (await invoicing.issue(draft.id)).value

        late = await issued_with(catalog.item_ids[0], due)
        partial = await issued_with(catalog.item_ids[1], due)
        await invoicing.pay(partial.id, 500)
        not_due = await issued_with(catalog.item_ids[2], date(2025, 2, 28))
        draft = (await invoicing.create_draft(catalog.client_id, due_date=due)).value

        worker = OverdueSweepWorker(session_factory=session_factory)

        # Act
        first = await worker.run_once(as_of=date(2025, 2, 1))
        second = await worker.run_once(as_of=date(2025, 2, 1))

        # Assert
        assert first.scanned == 1
        assert first.marked_overdue == 1
        assert first.failed == 0
        assert second.scanned == 0

        async def status_of(invoice_id):
            invoice = await invoicing.invoice_repo.get_by_id(
                invoicing.tenant_id, invoice_id, for_update=True
            )
            return invoice.status

        assert await status_of(late.id) == InvoiceStatus.OVERDUE
        assert await status_of(partial.id) == InvoiceStatus.PARTIALLY_PAID
        assert await status_of(not_due.id) == InvoiceStatus.SENT
        assert await status_of(draft.id) == InvoiceStatus.DRAFT
