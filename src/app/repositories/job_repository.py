"""Job Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.job import Job


class JobRepository(ABC):
    @abstractmethod
    async def get_by_id(self, tenant_id: str, job_id: str) -> Optional[Job]:
        pass

    @abstractmethod
    async def get_by_ids(self, tenant_id: str, job_ids: List[str]) -> List[Job]:
        """Jobs for the given IDs; missing IDs are skipped"""
        pass
