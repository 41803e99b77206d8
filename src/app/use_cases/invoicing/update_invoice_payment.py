"""UpdateInvoicePayment Use Case

Records the amount paid on an issued invoice and re-derives its status.
"""

from datetime import datetime
from typing import Callable
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.errors import NotFoundError
from .dtos import UpdatePaymentCommandDTO, InvoiceResponseDTO


class UpdateInvoicePayment:
    """
    Use Case: Update payment on an invoice

    Business Rules:
    1. Draft and void invoices cannot take payments
    2. 0 <= amount_paid_minor <= total_minor, rejected otherwise
    3. Status: paid when balance is 0, partially_paid when anything is
       paid, overdue when unpaid past the due date, else unchanged
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.clock = clock

    async def execute(self, command: UpdatePaymentCommandDTO) -> Result[InvoiceResponseDTO]:
        async def body() -> InvoiceResponseDTO:
            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")

            invoice.record_payment(command.amount_paid_minor, today=self.clock().date())
            updated = await self.invoice_repo.update(invoice)

            lines = await self.line_repo.get_by_invoice_id(invoice.id)
            return InvoiceResponseDTO.from_entity(updated, lines)

        return await run_in_transaction(
            self.uow,
            body,
            operation="UPDATE_PAYMENT",
            context={"tenant_id": command.tenant_id, "invoice_id": command.invoice_id},
        )
