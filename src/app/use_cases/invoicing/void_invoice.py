"""VoidInvoice Use Case

Cancels an invoice. Owners only.
"""

import logging
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.caller import TenantRole
from src.domain.errors import AuthorizationFailedError, NotFoundError
from src.domain.invoice import InvoiceStatus
from src.domain.job_item import ItemStatus
from .dtos import VoidInvoiceCommandDTO, VoidInvoiceResponseDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class VoidInvoice:
    """
    Use Case: Void an invoice

    Business Rules:
    1. Only tenant owners may void
    2. A void invoice cannot be voided again
    3. Voiding a draft returns its items to open
    4. Voiding an issued invoice leaves its items invoiced, so billed
       work stays traceable to the voided invoice
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

    async def execute(self, command: VoidInvoiceCommandDTO) -> Result[VoidInvoiceResponseDTO]:
        async def body() -> VoidInvoiceResponseDTO:
            if command.requester_role != TenantRole.OWNER.value:
                raise AuthorizationFailedError(
                    "VOID_NOT_PERMITTED", "Only the account owner can void invoices"
                )

            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")

            previous_status = invoice.void()
            lines = await self.line_repo.get_by_invoice_id(invoice.id)

            released = []
            if previous_status == InvoiceStatus.DRAFT:
                items = await self.job_item_repo.get_by_ids(
                    command.tenant_id, [line.job_item_id for line in lines], for_update=True
                )
                for item in items:
                    if item.is_locked_to(invoice.id) and item.status == ItemStatus.SELECTED:
                        item.release()
                        await self.job_item_repo.update(item)
                        released.append(item.id)

            updated = await self.invoice_repo.update(invoice)
            logger.info(
                f"Voided invoice {invoice.id} (was {previous_status.value}) for tenant "
                f"{command.tenant_id}, released {len(released)} items"
            )
            return VoidInvoiceResponseDTO(
                invoice=InvoiceResponseDTO.from_entity(updated, lines),
                previous_status=previous_status,
                released_job_item_ids=released,
            )

        return await run_in_transaction(
            self.uow,
            body,
            operation="VOID_INVOICE",
            context={"tenant_id": command.tenant_id, "invoice_id": command.invoice_id},
        )
