"""
List Invoices Use Case

Retrieves a tenant's invoices with an optional status filter and pagination.
"""
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO, InvoiceSummaryDTO


class ListInvoices:
    """
    Use case: List invoices

    Invoices are ordered by created_at DESC (most recent first).
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        invoices, total = await self.invoice_repo.get_by_tenant_id(
            tenant_id=query.tenant_id,
            status=query.status,
            limit=query.limit,
            offset=query.offset,
        )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[InvoiceSummaryDTO.from_entity(invoice) for invoice in invoices],
                total=total,
                limit=query.limit,
                offset=query.offset,
            )
        )
