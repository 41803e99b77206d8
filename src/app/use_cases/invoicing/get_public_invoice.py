"""GetPublicInvoice Use Case

Backs the unauthenticated invoice link: loads the invoice by token and
marks it viewed in the same transaction.
"""

from datetime import datetime
from typing import Callable, Optional
from config import ApplicationConfig
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.tenant_settings_repository import TenantSettingsRepository
from src.domain.errors import ErrorKind, NotFoundError
from src.domain.invoice import InvoiceStatus
from .dtos import PublicInvoiceDTO


class GetPublicInvoice:
    """
    Use Case: Public invoice view

    Business Rules:
    1. Lookup is by token only; the tenant comes from the invoice
    2. Draft invoices are not visible publicly
    3. Viewing a sent invoice marks it viewed
    4. Errors keep their kind as reason but never the internal exception text
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        settings_repo: TenantSettingsRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
        currency: str = ApplicationConfig.DEFAULT_CURRENCY,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.settings_repo = settings_repo
        self.clock = clock
        self.currency = currency

    async def execute(self, public_token: str) -> Result[PublicInvoiceDTO]:
        async def body() -> PublicInvoiceDTO:
            invoice = await self.invoice_repo.get_by_public_token(public_token, for_update=True)
            if invoice is None or invoice.status == InvoiceStatus.DRAFT:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")

            if invoice.mark_viewed(self.clock()):
                await self.invoice_repo.update(invoice)

            lines = await self.line_repo.get_by_invoice_id(invoice.id)
            settings = await self.settings_repo.get(invoice.tenant_id)
            return PublicInvoiceDTO.from_entity(invoice, lines, settings, self.currency)

        result = await run_in_transaction(self.uow, body, operation="GET_PUBLIC_INVOICE")
        if result.is_ok():
            return result

        kind = _public_kind(result.error.reason)
        if result.error.code == "INVOICE_NOT_FOUND":
            return Return.err(Error(code="INVOICE_NOT_FOUND", message="Invoice not found", reason=kind))
        return Return.err(Error(code=result.error.code, message="Unable to load invoice", reason=kind))


def _public_kind(reason: Optional[str]) -> str:
    """An error kind passes through; anything else is exception text"""
    known = {kind.value for kind in ErrorKind}
    return reason if reason in known else ErrorKind.INTERNAL.value
