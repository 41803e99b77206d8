"""Public invoice link

Unauthenticated; the token is the only credential.
"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.invoicing import GetPublicInvoice, PublicInvoiceDTO
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyTenantSettingsRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/public", tags=["Public"])


@router.get("/invoices/{public_token}", response_model=PublicInvoiceDTO)
async def get_public_invoice(public_token: str, session: AsyncSession = Depends(get_session)):
    """
    View an invoice through its public link.

    The first view of a sent invoice marks it viewed.

    **Returns:**
    - 200: Invoice with display-formatted amounts
    - 404: Unknown token or draft invoice
    """
    use_case = GetPublicInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_repo=SqlAlchemyInvoiceLineRepository(session),
        settings_repo=SqlAlchemyTenantSettingsRepository(session),
    )
    result = await use_case.execute(public_token)

    if result.is_err():
        raise ClientError(result.error)
    return result.value
