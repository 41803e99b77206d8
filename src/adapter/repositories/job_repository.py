"""SQLAlchemy Job Repository Implementation"""

from typing import Optional, List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.job_repository import JobRepository
from src.domain.job import Job


class SqlAlchemyJobRepository(JobRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: str, job_id: str) -> Optional[Job]:
        stmt = select(Job).where(Job.tenant_id == tenant_id, Job.id == job_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, tenant_id: str, job_ids: List[str]) -> List[Job]:
        if not job_ids:
            return []
        stmt = select(Job).where(Job.tenant_id == tenant_id, Job.id.in_(job_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
