"""
List Job Items Use Case

Retrieves the items of one job, newest first.
"""
from libs.result import Result, Return
from src.app.repositories.job_item_repository import JobItemRepository
from src.app.repositories.job_repository import JobRepository
from .dtos import ListJobItemsResponseDTO, JobItemResponseDTO


class ListJobItems:
    def __init__(self, job_repo: JobRepository, job_item_repo: JobItemRepository):
        self.job_repo = job_repo
        self.job_item_repo = job_item_repo

    async def execute(self, tenant_id: str, job_id: str) -> Result[ListJobItemsResponseDTO]:
        job = await self.job_repo.get_by_id(tenant_id, job_id)
        job_title = job.title if job else None

        items = await self.job_item_repo.get_by_job_id(tenant_id, job_id)
        return Return.ok(
            ListJobItemsResponseDTO(
                items=[JobItemResponseDTO.from_entity(item, job_title=job_title) for item in items],
                total=len(items),
            )
        )
