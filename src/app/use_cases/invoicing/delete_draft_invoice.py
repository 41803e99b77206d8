"""DeleteDraftInvoice Use Case"""

from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.errors import NotFoundError
from src.domain.job_item import ItemStatus
from .dtos import DeleteDraftInvoiceCommandDTO, DeleteInvoiceResponseDTO


class DeleteDraftInvoice:
    """
    Use Case: Delete a draft invoice

    Unlocks every item on the draft, then removes its lines and the
    invoice row. Issued invoices are never deleted; void them instead.
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

    async def execute(self, command: DeleteDraftInvoiceCommandDTO) -> Result[DeleteInvoiceResponseDTO]:
        async def body() -> DeleteInvoiceResponseDTO:
            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")
            invoice.ensure_draft("Only draft invoices can be deleted")

            lines = await self.line_repo.get_by_invoice_id(invoice.id)
            items = await self.job_item_repo.get_by_ids(
                command.tenant_id, [line.job_item_id for line in lines], for_update=True
            )

            released = []
            for item in items:
                if item.is_locked_to(invoice.id) and item.status == ItemStatus.SELECTED:
                    item.release()
                    await self.job_item_repo.update(item)
                    released.append(item.id)

            await self.line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)

            return DeleteInvoiceResponseDTO(invoice_id=command.invoice_id, released_job_item_ids=released)

        return await run_in_transaction(
            self.uow,
            body,
            operation="DELETE_INVOICE",
            context={"tenant_id": command.tenant_id, "invoice_id": command.invoice_id},
        )
