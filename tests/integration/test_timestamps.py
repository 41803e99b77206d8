"""Integration tests for naive UTC timestamps on table models"""

import pytest
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.job_item import JobItem
from tests.factories import make_job_item


@pytest.mark.asyncio
class TestTimestamps:
    async def test_naive_utc_timestamps_are_stored_and_read_back(self, db_session: AsyncSession):
        locked_at = datetime(2025, 1, 15, 9, 30, 0)
        item = make_job_item()
        item.select_for("invoice_1", locked_at)
        item_id = item.id
        db_session.add(item)
        await db_session.commit()

        stored = (
            await db_session.execute(
                select(JobItem).where(JobItem.id == item_id).execution_options(populate_existing=True)
            )
        ).scalar_one()

        assert stored.locked_at == locked_at
        assert stored.locked_at.tzinfo is None
        assert stored.created_at.tzinfo is None
        assert stored.updated_at >= stored.created_at
