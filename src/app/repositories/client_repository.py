"""Client Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.client import Client


class ClientRepository(ABC):
    @abstractmethod
    async def get_by_id(self, tenant_id: str, client_id: str) -> Optional[Client]:
        pass
