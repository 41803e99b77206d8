"""SQLAlchemy Invoice Line Repository Implementation"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLine


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLine]:
        stmt = (
            select(InvoiceLine)
            .where(InvoiceLine.invoice_id == invoice_id)
            .order_by(InvoiceLine.position)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_many(self, invoice_lines: List[InvoiceLine]) -> List[InvoiceLine]:
        self.session.add_all(invoice_lines)
        await self.session.flush()
        return invoice_lines

    async def delete(self, invoice_line: InvoiceLine) -> None:
        await self.session.delete(invoice_line)
        await self.session.flush()

    async def delete_by_invoice_id(self, invoice_id: str) -> None:
        await self.session.execute(
            delete(InvoiceLine).where(InvoiceLine.invoice_id == invoice_id)
        )
        await self.session.flush()
