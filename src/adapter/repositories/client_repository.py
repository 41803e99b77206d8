"""SQLAlchemy Client Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client


class SqlAlchemyClientRepository(ClientRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: str, client_id: str) -> Optional[Client]:
        stmt = select(Client).where(Client.tenant_id == tenant_id, Client.id == client_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
