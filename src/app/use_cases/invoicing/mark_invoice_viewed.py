"""MarkInvoiceViewed Use Case

Records the first time a client opens the public invoice link.
"""

from datetime import datetime
from typing import Callable
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import NotFoundError
from .dtos import MarkViewedResponseDTO


class MarkInvoiceViewed:
    """
    Use Case: Mark an invoice viewed by public token

    Only a sent invoice that was never viewed changes (sent -> viewed);
    every other state is a successful no-op.
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

    async def execute(self, public_token: str) -> Result[MarkViewedResponseDTO]:
        async def body() -> MarkViewedResponseDTO:
            invoice = await self.invoice_repo.get_by_public_token(public_token, for_update=True)
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")

            changed = invoice.mark_viewed(self.clock())
            if changed:
                await self.invoice_repo.update(invoice)

            return MarkViewedResponseDTO(
                invoice_id=invoice.id,
                status=invoice.status,
                viewed_at=invoice.viewed_at,
                changed=changed,
            )

        return await run_in_transaction(self.uow, body, operation="MARK_VIEWED")
