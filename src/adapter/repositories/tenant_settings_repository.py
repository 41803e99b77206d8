"""SQLAlchemy Tenant Settings Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.tenant_settings_repository import TenantSettingsRepository
from src.domain.tenant_settings import TenantSettings


class SqlAlchemyTenantSettingsRepository(TenantSettingsRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, tenant_id: str) -> Optional[TenantSettings]:
        stmt = select(TenantSettings).where(TenantSettings.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
