"""Job Item API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.job_item_request import CreateJobItemRequestSchema, UpdateJobItemRequestSchema
from src.app.use_cases.job_items import (
    CreateJobItem,
    UpdateJobItem,
    DeleteJobItem,
    ListJobItems,
    ListOpenJobItems,
    CreateJobItemCommandDTO,
    UpdateJobItemCommandDTO,
    JobItemResponseDTO,
    ListJobItemsResponseDTO,
)
from src.adapter.repositories import SqlAlchemyJobRepository, SqlAlchemyJobItemRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.caller import Caller
from src.depends import get_session, get_caller
from src.api.error import ClientError

router = APIRouter(tags=["Job Items"])


@router.post("/job-items", response_model=JobItemResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_job_item(
    request: CreateJobItemRequestSchema,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a billable job item.

    **Returns:**
    - 201: Item created with status open
    - 404: Job not found
    - 422: quantity <= 0 or negative unit price
    """
    use_case = CreateJobItem(
        uow=SqlAlchemyUnitOfWork(session),
        job_repo=SqlAlchemyJobRepository(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
    )
    result = await use_case.execute(
        CreateJobItemCommandDTO(
            tenant_id=caller.tenant_id,
            user_id=caller.user_id,
            **request.model_dump(),
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.patch("/job-items/{job_item_id}", response_model=JobItemResponseDTO)
async def update_job_item(
    job_item_id: str,
    request: UpdateJobItemRequestSchema,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """Edit an open job item. Selected or invoiced items return 409."""
    use_case = UpdateJobItem(
        uow=SqlAlchemyUnitOfWork(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
    )
    result = await use_case.execute(
        UpdateJobItemCommandDTO(
            tenant_id=caller.tenant_id,
            job_item_id=job_item_id,
            **request.model_dump(exclude_unset=True),
        )
    )

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/job-items/{job_item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job_item(
    job_item_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    use_case = DeleteJobItem(
        uow=SqlAlchemyUnitOfWork(session),
        job_item_repo=SqlAlchemyJobItemRepository(session),
    )
    result = await use_case.execute(caller.tenant_id, job_item_id)

    if result.is_err():
        raise ClientError(result.error)


@router.get("/jobs/{job_id}/items", response_model=ListJobItemsResponseDTO)
async def list_job_items(
    job_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    use_case = ListJobItems(SqlAlchemyJobRepository(session), SqlAlchemyJobItemRepository(session))
    result = await use_case.execute(caller.tenant_id, job_id)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/clients/{client_id}/open-items", response_model=ListJobItemsResponseDTO)
async def list_open_job_items(
    client_id: str,
    caller: Caller = Depends(get_caller),
    session: AsyncSession = Depends(get_session),
):
    """Open, unlocked items for a client with their job titles (invoice item picker)."""
    use_case = ListOpenJobItems(SqlAlchemyJobRepository(session), SqlAlchemyJobItemRepository(session))
    result = await use_case.execute(caller.tenant_id, client_id)

    if result.is_err():
        raise ClientError(result.error)
    return result.value
