"""Job Item Repository Interface

Defines the contract for job item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.job_item import JobItem


class JobItemRepository(ABC):
    """
    Repository interface for JobItem persistence

    Mutating use cases read items with for_update=True; updates carry an
    optimistic version check so a concurrent change surfaces as a write
    conflict instead of a lost update.
    """

    @abstractmethod
    async def get_by_id(
        self, tenant_id: str, job_item_id: str, for_update: bool = False
    ) -> Optional[JobItem]:
        """
        Retrieve job item by ID

        Args:
            tenant_id: Tenant identifier
            job_item_id: Job item ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            JobItem if found in this tenant, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(
        self, tenant_id: str, job_item_ids: List[str], for_update: bool = False
    ) -> List[JobItem]:
        """
        Retrieve several job items

        Args:
            tenant_id: Tenant identifier
            job_item_ids: Job item IDs
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            Found job items (missing IDs are simply absent, order not guaranteed)
        """
        pass

    @abstractmethod
    async def get_by_job_id(self, tenant_id: str, job_id: str) -> List[JobItem]:
        """Items of one job, newest first"""
        pass

    @abstractmethod
    async def get_open_by_client_id(self, tenant_id: str, client_id: str) -> List[JobItem]:
        """Open (unlocked) items of one client, newest first"""
        pass

    @abstractmethod
    async def create(self, job_item: JobItem) -> JobItem:
        pass

    @abstractmethod
    async def update(self, job_item: JobItem) -> JobItem:
        pass

    @abstractmethod
    async def delete(self, job_item: JobItem) -> None:
        pass
