"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from datetime import date
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (PostgreSQL)
    - Optimistic version check on every UPDATE/DELETE
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(
        self, tenant_id: str, invoice_id: str, for_update: bool = False
    ) -> Optional[Invoice]:
        stmt = select(Invoice).where(
            Invoice.tenant_id == tenant_id,
            Invoice.id == invoice_id,
        )

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_public_token(
        self, public_token: str, for_update: bool = False
    ) -> Optional[Invoice]:
        stmt = select(Invoice).where(Invoice.public_token == public_token)

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_tenant_id(
        self,
        tenant_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Retrieve invoices by tenant ID

        Args:
            tenant_id: Tenant identifier
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (invoices newest first, total count)
        """
        filters = [Invoice.tenant_id == tenant_id]
        if status:
            filters.append(Invoice.status == status)

        count_stmt = select(func.count()).select_from(Invoice).where(*filters)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar_one()

        stmt = (
            select(Invoice)
            .where(*filters)
            .order_by(Invoice.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_overdue_candidates(self, today: date, limit: int = 500) -> List[Invoice]:
        stmt = (
            select(Invoice)
            .where(
                Invoice.status.in_([InvoiceStatus.SENT, InvoiceStatus.VIEWED]),
                Invoice.amount_paid_minor == 0,
                Invoice.due_date.is_not(None),
                Invoice.due_date < today,
            )
            .order_by(Invoice.due_date)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()
