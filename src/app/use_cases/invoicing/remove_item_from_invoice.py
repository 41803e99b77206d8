"""RemoveItemFromInvoice Use Case

Drops one line from a draft invoice and returns its job item to open.
"""

from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.errors import NotFoundError
from src.domain.job_item import ItemStatus
from .dtos import RemoveItemCommandDTO, InvoiceResponseDTO


class RemoveItemFromInvoice:
    """
    Use Case: Remove a job item's line from a draft invoice

    Business Rules:
    1. The invoice must exist and be a draft
    2. Removing an item that has no line is a successful no-op
    3. The item is unlocked only when its lock points at this invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        job_item_repo: JobItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.job_item_repo = job_item_repo

    async def execute(self, command: RemoveItemCommandDTO) -> Result[InvoiceResponseDTO]:
        async def body() -> InvoiceResponseDTO:
            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")
            invoice.ensure_draft("Can only remove items from draft invoices")

            lines = await self.line_repo.get_by_invoice_id(invoice.id)
            line = next((line for line in lines if line.job_item_id == command.job_item_id), None)
            if line is None:
                return InvoiceResponseDTO.from_entity(invoice, lines)

            await self.line_repo.delete(line)
            remaining = [other for other in lines if other is not line]
            invoice.apply_lines(remaining)
            updated = await self.invoice_repo.update(invoice)

            item = await self.job_item_repo.get_by_id(
                command.tenant_id, command.job_item_id, for_update=True
            )
            if item is not None and item.is_locked_to(invoice.id) and item.status == ItemStatus.SELECTED:
                item.release()
                await self.job_item_repo.update(item)

            return InvoiceResponseDTO.from_entity(updated, remaining)

        return await run_in_transaction(
            self.uow,
            body,
            operation="REMOVE_ITEM",
            context={
                "tenant_id": command.tenant_id,
                "invoice_id": command.invoice_id,
                "job_item_id": command.job_item_id,
            },
        )
