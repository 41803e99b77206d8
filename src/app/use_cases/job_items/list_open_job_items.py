"""
List Open Job Items Use Case

Items of a client that are still available to bill, with their job titles.
This is the picker list used when adding items to a draft invoice.
"""
from libs.result import Result, Return
from src.app.repositories.job_item_repository import JobItemRepository
from src.app.repositories.job_repository import JobRepository
from src.app.use_cases.invoicing.add_items_to_invoice import UNKNOWN_JOB_TITLE
from .dtos import ListJobItemsResponseDTO, JobItemResponseDTO


class ListOpenJobItems:
    """
    Use case: List open job items for a client

    Only items with status open and no lock are returned, newest first.
    """

    def __init__(self, job_repo: JobRepository, job_item_repo: JobItemRepository):
        self.job_repo = job_repo
        self.job_item_repo = job_item_repo

    async def execute(self, tenant_id: str, client_id: str) -> Result[ListJobItemsResponseDTO]:
        """
        List open items for a client

        Args:
            tenant_id: Tenant identifier
            client_id: Client ID

        Returns:
            Result[ListJobItemsResponseDTO]: Items with job_title filled in
        """
        items = await self.job_item_repo.get_open_by_client_id(tenant_id, client_id)

        jobs = await self.job_repo.get_by_ids(
            tenant_id, list(dict.fromkeys(item.job_id for item in items))
        )
        job_titles = {job.id: job.title for job in jobs}

        return Return.ok(
            ListJobItemsResponseDTO(
                items=[
                    JobItemResponseDTO.from_entity(
                        item, job_title=job_titles.get(item.job_id, UNKNOWN_JOB_TITLE)
                    )
                    for item in items
                ],
                total=len(items),
            )
        )
