"""UpdateJobItem Use Case"""

from decimal import Decimal
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.errors import NotFoundError
from src.domain.job_item import JobItem
from .dtos import UpdateJobItemCommandDTO, JobItemResponseDTO


class UpdateJobItem:
    """
    Use Case: Edit a job item

    Only open items can be edited. Selected and invoiced items are frozen
    so the lines already snapshotted from them stay accurate.
    """

    def __init__(self, uow: UnitOfWork, job_item_repo: JobItemRepository):
        self.uow = uow
        self.job_item_repo = job_item_repo

    async def execute(self, command: UpdateJobItemCommandDTO) -> Result[JobItemResponseDTO]:
        async def body() -> JobItemResponseDTO:
            item = await self.job_item_repo.get_by_id(
                command.tenant_id, command.job_item_id, for_update=True
            )
            if item is None:
                raise NotFoundError("JOB_ITEM_NOT_FOUND", "Job item not found")

            item.ensure_editable()
            JobItem.validate_amounts(command.quantity, command.unit_price_minor)

            if command.title is not None:
                item.title = command.title
            if command.description is not None:
                item.description = command.description
            if command.unit is not None:
                item.unit = command.unit
            if command.quantity is not None:
                item.quantity = Decimal(str(command.quantity))
            if command.unit_price_minor is not None:
                item.unit_price_minor = command.unit_price_minor
            if command.tax_applicable is not None:
                item.tax_applicable = command.tax_applicable

            updated = await self.job_item_repo.update(item)
            return JobItemResponseDTO.from_entity(updated)

        return await run_in_transaction(
            self.uow,
            body,
            operation="UPDATE_JOB_ITEM",
            context={"tenant_id": command.tenant_id, "job_item_id": command.job_item_id},
        )
