"""MarkInvoiceOverdue Use Case

Moves one unpaid invoice past its due date to overdue. Run by the
overdue sweep worker, one transaction per invoice.
"""

from datetime import datetime
from typing import Callable
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import NotFoundError
from .dtos import MarkOverdueCommandDTO


class MarkInvoiceOverdue:
    """
    Use Case: Re-derive overdue status for one invoice

    Uses the same status derivation as payment updates, so only a sent or
    viewed invoice with nothing paid and a past due date changes.

    Returns True when the invoice became overdue, False when it was left as is.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.clock = clock

    async def execute(self, command: MarkOverdueCommandDTO) -> Result[bool]:
        async def body() -> bool:
            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")

            changed = invoice.refresh_overdue(self.clock().date())
            if changed:
                await self.invoice_repo.update(invoice)
            return changed

        return await run_in_transaction(
            self.uow,
            body,
            operation="MARK_OVERDUE",
            context={"tenant_id": command.tenant_id, "invoice_id": command.invoice_id},
        )
