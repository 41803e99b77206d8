"""Job item use cases"""
from .create_job_item import CreateJobItem
from .update_job_item import UpdateJobItem
from .delete_job_item import DeleteJobItem
from .list_job_items import ListJobItems
from .list_open_job_items import ListOpenJobItems
from .dtos import (
    CreateJobItemCommandDTO,
    UpdateJobItemCommandDTO,
    JobItemResponseDTO,
    ListJobItemsResponseDTO,
)

__all__ = [
    "CreateJobItem",
    "UpdateJobItem",
    "DeleteJobItem",
    "ListJobItems",
    "ListOpenJobItems",
    "CreateJobItemCommandDTO",
    "UpdateJobItemCommandDTO",
    "JobItemResponseDTO",
    "ListJobItemsResponseDTO",
]
