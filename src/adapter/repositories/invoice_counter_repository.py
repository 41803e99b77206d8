"""SQLAlchemy implementation of InvoiceCounterRepository

A lost race on the first insert of a year surfaces as an IntegrityError
from the unique (tenant_id, year) index; a lost race on increment surfaces
as a StaleDataError from the version column. Both are retried by the
caller's transaction.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_counter_repository import InvoiceCounterRepository
from src.domain.invoice_counter import InvoiceCounter


class SqlAlchemyInvoiceCounterRepository(InvoiceCounterRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, tenant_id: str, year: int, for_update: bool = False) -> Optional[InvoiceCounter]:
        stmt = select(InvoiceCounter).where(
            InvoiceCounter.tenant_id == tenant_id,
            InvoiceCounter.year == year,
        )

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, counter: InvoiceCounter) -> InvoiceCounter:
        self.session.add(counter)
        await self.session.flush()
        await self.session.refresh(counter)
        return counter

    async def update(self, counter: InvoiceCounter) -> InvoiceCounter:
        counter.updated_at = datetime.utcnow()
        self.session.add(counter)
        await self.session.flush()
        await self.session.refresh(counter)
        return counter
