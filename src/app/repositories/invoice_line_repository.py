"""Invoice Line Repository Interface

Defines the contract for invoice line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_line import InvoiceLine


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLine persistence

    Lines are owned by their invoice and always read in position order.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items ordered by position
        """
        pass

    @abstractmethod
    async def create_many(self, invoice_lines: List[InvoiceLine]) -> List[InvoiceLine]:
        """
        Persist new line items

        Args:
            invoice_lines: InvoiceLine entities to persist

        Returns:
            Created InvoiceLine items
        """
        pass

    @abstractmethod
    async def delete(self, invoice_line: InvoiceLine) -> None:
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> None:
        pass
