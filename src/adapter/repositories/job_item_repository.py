"""SQLAlchemy implementation of JobItemRepository

Provides persistence for JobItem entities. Reads taken with for_update
lock the rows (PostgreSQL) and always reload current column values, so a
retried transaction never sees a stale lock state.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.job_item import JobItem, ItemStatus


class SqlAlchemyJobItemRepository(JobItemRepository):
    """
    SQLAlchemy implementation of JobItemRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Optimistic version check on UPDATE (StaleDataError on conflict)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, tenant_id: str, job_item_id: str, for_update: bool = False
    ) -> Optional[JobItem]:
        """
        Retrieve job item by ID with optional row-level locking

        Args:
            tenant_id: Tenant identifier
            job_item_id: Job item ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            JobItem if found, None otherwise
        """
        stmt = select(JobItem).where(
            JobItem.tenant_id == tenant_id,
            JobItem.id == job_item_id,
        )

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(
        self, tenant_id: str, job_item_ids: List[str], for_update: bool = False
    ) -> List[JobItem]:
        if not job_item_ids:
            return []

        # Stable lock order so two transactions never wait on each other in a cycle
        stmt = (
            select(JobItem)
            .where(JobItem.tenant_id == tenant_id, JobItem.id.in_(job_item_ids))
            .order_by(JobItem.id)
        )

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_job_id(self, tenant_id: str, job_id: str) -> List[JobItem]:
        stmt = (
            select(JobItem)
            .where(JobItem.tenant_id == tenant_id, JobItem.job_id == job_id)
            .order_by(JobItem.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_open_by_client_id(self, tenant_id: str, client_id: str) -> List[JobItem]:
        stmt = (
            select(JobItem)
            .where(
                JobItem.tenant_id == tenant_id,
                JobItem.client_id == client_id,
                JobItem.status == ItemStatus.OPEN,
                JobItem.lock_invoice_id.is_(None),
            )
            .order_by(JobItem.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, job_item: JobItem) -> JobItem:
        self.session.add(job_item)
        await self.session.flush()
        await self.session.refresh(job_item)
        return job_item

    async def update(self, job_item: JobItem) -> JobItem:
        """
        Update job item

        Args:
            job_item: JobItem entity with updated values

        Returns:
            Updated JobItem
        """
        job_item.updated_at = datetime.utcnow()
        self.session.add(job_item)
        await self.session.flush()
        await self.session.refresh(job_item)
        return job_item

    async def delete(self, job_item: JobItem) -> None:
        await self.session.delete(job_item)
        await self.session.flush()
