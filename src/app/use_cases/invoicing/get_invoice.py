"""Get Invoice Use Case

Retrieves one invoice with its lines.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.errors import ErrorKind
from .dtos import InvoiceResponseDTO


class GetInvoice:
    """
    Get Invoice Use Case

    Read-only; scoped to the caller's tenant so another tenant's invoice
    reads as not found.
    """

    def __init__(self, invoice_repo: InvoiceRepository, line_repo: InvoiceLineRepository):
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo

    async def execute(self, tenant_id: str, invoice_id: str) -> Result[InvoiceResponseDTO]:
        """
        Execute get invoice

        Args:
            tenant_id: The tenant identifier
            invoice_id: Invoice ID

        Returns:
            Result[InvoiceResponseDTO]: Invoice with lines or error

        Errors:
            INVOICE_NOT_FOUND: No such invoice in this tenant
        """
        invoice = await self.invoice_repo.get_by_id(tenant_id, invoice_id)

        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message="Invoice not found",
                    reason=ErrorKind.NOT_FOUND.value,
                )
            )

        lines = await self.line_repo.get_by_invoice_id(invoice.id)
        return Return.ok(InvoiceResponseDTO.from_entity(invoice, lines))
