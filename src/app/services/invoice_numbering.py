"""Sequential Numbering Allocator

Hands out gap-free invoice numbers per (tenant, year). Must run inside the
issuing transaction so a failed issue never consumes a number.
"""

import logging
from typing import Tuple
from src.app.repositories.invoice_counter_repository import InvoiceCounterRepository
from src.domain.invoice_counter import InvoiceCounter, format_invoice_number

logger = logging.getLogger(__name__)


class InvoiceNumberAllocator:
    """
    Allocates the next invoice number for a tenant and year

    The counter row is read with a row lock where the database supports
    it. A concurrent first insert trips the unique (tenant_id, year)
    constraint and a concurrent increment trips the version check; both
    surface as write conflicts and the caller retries the transaction.
    """

    def __init__(self, counter_repo: InvoiceCounterRepository):
        self.counter_repo = counter_repo

    async def next_number(self, tenant_id: str, year: int) -> Tuple[int, str]:
        """
        Reserve the next number

        Args:
            tenant_id: Tenant identifier
            year: Calendar year of issuance

        Returns:
            (number, formatted number), e.g. (1, "2025-001")
        """
        counter = await self.counter_repo.get(tenant_id, year, for_update=True)

        if counter is None:
            counter = InvoiceCounter(tenant_id=tenant_id, year=year, last_number=1)
            await self.counter_repo.create(counter)
            number = 1
        else:
            number = counter.advance()
            await self.counter_repo.update(counter)

        logger.debug(f"Allocated invoice number {number} for tenant {tenant_id}, year {year}")
        return number, format_invoice_number(year, number)
