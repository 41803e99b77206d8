"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple
from datetime import date
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Every lookup except get_by_public_token is scoped to a tenant.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, tenant_id: str, invoice_id: str, for_update: bool = False
    ) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            tenant_id: Tenant identifier
            invoice_id: Invoice ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Invoice if found in this tenant, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_public_token(
        self, public_token: str, for_update: bool = False
    ) -> Optional[Invoice]:
        """
        Retrieve invoice by its public access token (any tenant)

        Args:
            public_token: Opaque token from the public link
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_tenant_id(
        self,
        tenant_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Retrieve invoices by tenant ID, newest first

        Args:
            tenant_id: Tenant identifier
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (invoices, total matching count)
        """
        pass

    @abstractmethod
    async def get_overdue_candidates(self, today: date, limit: int = 500) -> List[Invoice]:
        """
        Retrieve sent/viewed invoices with nothing paid and a due date before today

        Args:
            today: Reference date
            limit: Maximum number of invoices to return

        Returns:
            List of invoices across all tenants
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Raises a write conflict if the row changed since it was read.

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice row; its lines must already be deleted

        Args:
            invoice: Invoice entity to remove
        """
        pass
