"""IssueInvoice Use Case

Assigns the next sequential number to a draft invoice and freezes it.
"""

import logging
from datetime import datetime
from typing import Callable
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.services.invoice_numbering import InvoiceNumberAllocator
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.errors import NotFoundError, PreconditionFailedError
from src.domain.invoice import format_invoice_display_number, generate_invoice_code
from .dtos import IssueInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class IssueInvoice:
    """
    Use Case: Issue a draft invoice

    Business Rules:
    1. Only a draft invoice with at least one line can be issued
    2. The number is the next one for (tenant, year of issue), gap-free
    3. A client shortcode yields a display number like QNTS-5TU72
    4. Every item locked to the invoice becomes invoiced (lock kept)
    5. Number allocation and status change commit together; a failed
       issue never consumes a number

    Flow:
    1. Get invoice with lock (SELECT FOR UPDATE)
    2. Check draft and non-empty
    3. Allocate number from the counter (row lock + version check)
    4. Mark invoice sent
    5. Flip locked items to invoiced
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        job_item_repo: JobItemRepository,
        allocator: InvoiceNumberAllocator,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.job_item_repo = job_item_repo
        self.allocator = allocator
        self.clock = clock

    async def execute(self, command: IssueInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice issuance

        Args:
            command: IssueInvoiceCommandDTO with tenant_id, invoice_id, user_id

        Returns:
            Result[InvoiceResponseDTO]: Issued invoice or error
        """

        async def body() -> InvoiceResponseDTO:
            # Step 1: Get invoice with pessimistic lock
            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")

            # Step 2: Check preconditions before touching the counter
            invoice.ensure_draft("Only draft invoices can be issued")
            lines = await self.line_repo.get_by_invoice_id(invoice.id)
            if not lines:
                raise PreconditionFailedError(
                    "INVOICE_HAS_NO_LINES", "Cannot issue an invoice with no line items"
                )

            # Step 3: Allocate number
            issued_at = self.clock()
            _, invoice_number = await self.allocator.next_number(command.tenant_id, issued_at.year)

            display_number = None
            if invoice.client_shortcode:
                display_number = format_invoice_display_number(
                    invoice.client_shortcode, generate_invoice_code()
                )

            # Step 4: Mark sent
            invoice.issue(
                invoice_number=invoice_number,
                issued_by=command.user_id,
                at=issued_at,
                line_count=len(lines),
                display_number=display_number,
            )
            updated = await self.invoice_repo.update(invoice)

            # Step 5: Flip locked items to invoiced
            items = await self.job_item_repo.get_by_ids(
                command.tenant_id, [line.job_item_id for line in lines], for_update=True
            )
            for item in items:
                if item.is_locked_to(invoice.id):
                    item.mark_invoiced()
                    await self.job_item_repo.update(item)

            logger.info(
                f"Issued invoice {invoice_number} (id={invoice.id}) for tenant {command.tenant_id}"
            )
            return InvoiceResponseDTO.from_entity(updated, lines)

        return await run_in_transaction(
            self.uow,
            body,
            operation="ISSUE_INVOICE",
            context={"tenant_id": command.tenant_id, "invoice_id": command.invoice_id},
        )
