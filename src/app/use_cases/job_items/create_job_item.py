"""CreateJobItem Use Case"""

from decimal import Decimal
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.job_repository import JobRepository
from src.app.repositories.job_item_repository import JobItemRepository
from src.domain.errors import NotFoundError
from src.domain.job_item import JobItem, ItemStatus
from .dtos import CreateJobItemCommandDTO, JobItemResponseDTO


class CreateJobItem:
    """
    Use Case: Create a billable job item

    Business Rules:
    1. The job must exist in the caller's tenant
    2. client_id is copied from the job
    3. quantity > 0 and unit_price_minor >= 0, rejected otherwise
    4. New items start open and unlocked
    """

    def __init__(self, uow: UnitOfWork, job_repo: JobRepository, job_item_repo: JobItemRepository):
        self.uow = uow
        self.job_repo = job_repo
        self.job_item_repo = job_item_repo

    async def execute(self, command: CreateJobItemCommandDTO) -> Result[JobItemResponseDTO]:
        async def body() -> JobItemResponseDTO:
            JobItem.validate_amounts(command.quantity, command.unit_price_minor)

            job = await self.job_repo.get_by_id(command.tenant_id, command.job_id)
            if job is None:
                raise NotFoundError("JOB_NOT_FOUND", "Job not found")

            item = JobItem(
                tenant_id=command.tenant_id,
                job_id=job.id,
                client_id=job.client_id,
                title=command.title,
                description=command.description,
                unit=command.unit,
                quantity=Decimal(str(command.quantity)),
                unit_price_minor=command.unit_price_minor,
                tax_applicable=command.tax_applicable,
                status=ItemStatus.OPEN,
                created_by=command.user_id,
            )
            created = await self.job_item_repo.create(item)
            return JobItemResponseDTO.from_entity(created, job_title=job.title)

        return await run_in_transaction(
            self.uow,
            body,
            operation="CREATE_JOB_ITEM",
            context={"tenant_id": command.tenant_id, "job_id": command.job_id},
        )
