"""Invoice API Routes

FastAPI routes for the draft -> issue -> payment workflow.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    AddItemsRequestSchema,
    UpdatePaymentRequestSchema,
)
from src.app.services.invoice_numbering import InvoiceNumberAllocator
from src.app.use_cases.invoicing import (
    CreateDraftInvoice,
    AddItemsToInvoice,
    RemoveItemFromInvoice,
    IssueInvoice,
    UpdateInvoicePayment,
    VoidInvoice,
    DeleteDraftInvoice,
    GetInvoice,
    ListInvoices,
    CreateDraftInvoiceCommandDTO,
    AddItemsCommandDTO,
    RemoveItemCommandDTO,
    IssueInvoiceCommandDTO,
    UpdatePaymentCommandDTO,
    VoidInvoiceCommandDTO,
    DeleteDraftInvoiceCommandDTO,
    ListInvoicesQueryDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    VoidInvoiceResponseDTO,
    DeleteInvoiceResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyJobRepository,
    SqlAlchemyTenantSettingsRepository,
    SqlAlchemyJobItemRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyInvoiceCounterRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.caller import Caller
from src.domain.invoice import InvoiceStatus
from src.depends import get_session, get_caller
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])

ERROR_EXAMPLE = {
    "application/json": {
        "example": {
            "error": {
                "code": "INVOICE_NOT_DRAFT",
                "message": "Can only add items to draft invoices"
            }
        }
    }
}


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice for a client.

    The client's name, email, ABN and address are copied onto the invoice.

    **Returns:**
    - 201: Draft created
    - 404: Client not found
    """
    use_case = CreateDraftInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        client_repo=SqlAlchemyClientRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(
        CreateDraftInvoiceCommandDTO(
            tenant_id=caller.tenant_id,
            user_id=caller.user_id,
            client_id=request.client_id,
            due_date=request.due_date,
            notes=request.notes,
            payment_instructions=request.payment_instructions,
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """List the tenant's invoices, newest first, optionally filtered by status."""
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(
        ListInvoicesQueryDTO(
            tenant_id=caller.tenant_id, status=status_filter, limit=limit, offset=offset
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
async def get_invoice(
    invoice_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session), SqlAlchemyInvoiceLineRepository(session)
    )
    result = await use_case.execute(caller.tenant_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{invoice_id}/items",
    response_model=InvoiceResponseDTO,
    responses={409: {"description": "Invoice not draft or item not available", "content": ERROR_EXAMPLE}},
)
async def add_items(
    invoice_id: str,
    request: AddItemsRequestSchema,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """
    Add job items to a draft invoice.

    All-or-nothing: if any item is missing, not open, or already locked to
    another invoice, nothing is added.

    **Returns:**
    - 200: Updated invoice with recomputed totals
    - 404: Invoice or job item not found
    - 409: Invoice is not a draft, or an item is not available
    - 422: Empty list or duplicate IDs
    """
    use_case = AddItemsToInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
        job_repo=SqlAlchemyJobRepository(session),
        settings_repo=SqlAlchemyTenantSettingsRepository(session),
    )
    result = await use_case.execute(
        AddItemsCommandDTO(
            tenant_id=caller.tenant_id,
            invoice_id=invoice_id,
            job_item_ids=request.job_item_ids,
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{invoice_id}/items/{job_item_id}", response_model=InvoiceResponseDTO)
async def remove_item(
    invoice_id: str,
    job_item_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """Remove a job item's line from a draft invoice and return the item to open."""
    use_case = RemoveItemFromInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
    )
    result = await use_case.execute(
        RemoveItemCommandDTO(
            tenant_id=caller.tenant_id, invoice_id=invoice_id, job_item_id=job_item_id
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{invoice_id}/issue", response_model=InvoiceResponseDTO)
async def issue_invoice(
    invoice_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """
    Issue a draft invoice.

    Assigns the next number for the tenant and year (e.g. 2025-001) and
    marks every item on the invoice as invoiced.

    **Returns:**
    - 200: Issued invoice
    - 404: Invoice not found
    - 409: Not a draft, or no lines
    - 503: Too many concurrent issuers, retry
    """
    use_case = IssueInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
        allocator=InvoiceNumberAllocator(SqlAlchemyInvoiceCounterRepository(session)),
    )
    result = await use_case.execute(
        IssueInvoiceCommandDTO(
            tenant_id=caller.tenant_id, invoice_id=invoice_id, user_id=caller.user_id
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{invoice_id}/payment", response_model=InvoiceResponseDTO)
async def update_payment(
    invoice_id: str,
    request: UpdatePaymentRequestSchema,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """Record the total amount paid; status becomes paid, partially_paid or overdue."""
    use_case = UpdateInvoicePayment(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(
        UpdatePaymentCommandDTO(
            tenant_id=caller.tenant_id,
            invoice_id=invoice_id,
            amount_paid_minor=request.amount_paid_minor,
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{invoice_id}/void", response_model=VoidInvoiceResponseDTO)
async def void_invoice(
    invoice_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """
    Void an invoice (owners only).

    **Returns:**
    - 200: Invoice voided
    - 403: Caller is not the owner
    - 404: Invoice not found
    - 409: Already void
    """
    use_case = VoidInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
    )
    result = await use_case.execute(
        VoidInvoiceCommandDTO(
            tenant_id=caller.tenant_id,
            invoice_id=invoice_id,
            requester_role=caller.role.value,
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{invoice_id}", response_model=DeleteInvoiceResponseDTO)
async def delete_invoice(
    invoice_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """Delete a draft invoice and release its job items."""
    use_case = DeleteDraftInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
    )
    result = await use_case.execute(
        DeleteDraftInvoiceCommandDTO(tenant_id=caller.tenant_id, invoice_id=invoice_id)
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value
