"""Invoice Counter Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.invoice_counter import InvoiceCounter


class InvoiceCounterRepository(ABC):
    """
    Repository interface for InvoiceCounter persistence

    Only the numbering allocator uses it, inside the issuing transaction.
    """

    @abstractmethod
    async def get(self, tenant_id: str, year: int, for_update: bool = False) -> Optional[InvoiceCounter]:
        """
        Retrieve the counter for a tenant and year

        Args:
            tenant_id: Tenant identifier
            year: Calendar year
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            InvoiceCounter if one exists, None before the year's first issue
        """
        pass

    @abstractmethod
    async def create(self, counter: InvoiceCounter) -> InvoiceCounter:
        pass

    @abstractmethod
    async def update(self, counter: InvoiceCounter) -> InvoiceCounter:
        pass
