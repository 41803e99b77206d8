"""DeleteJobItem Use Case"""

from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.errors import NotFoundError


class DeleteJobItem:
    """Delete an open job item; selected or invoiced items are refused"""

    def __init__(self, uow: UnitOfWork, job_item_repo: JobItemRepository):
        self.uow = uow
        self.job_item_repo = job_item_repo

    async def execute(self, tenant_id: str, job_item_id: str) -> Result[str]:
        async def body() -> str:
            item = await self.job_item_repo.get_by_id(tenant_id, job_item_id, for_update=True)
            if item is None:
                raise NotFoundError("JOB_ITEM_NOT_FOUND", "Job item not found")

            item.ensure_editable()
            await self.job_item_repo.delete(item)
            return job_item_id

        return await run_in_transaction(
            self.uow,
            body,
            operation="DELETE_JOB_ITEM",
            context={"tenant_id": tenant_id, "job_item_id": job_item_id},
        )
