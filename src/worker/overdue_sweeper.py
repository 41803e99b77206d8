"""Overdue Invoice Sweep Background Worker

Moves sent/viewed invoices that are unpaid past their due date to overdue.
Can be run as a standalone script (e.g. from cron) or continuously.
"""

import asyncio
import logging
import time
from datetime import datetime, date
from typing import Callable, Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import (
    MarkInvoiceOverdue,
    MarkOverdueCommandDTO,
    OverdueSweepResultDTO,
)

logger = logging.getLogger(__name__)


class OverdueSweepWorker:
    """
    Background worker for overdue status

    Features:
    - Scans every tenant for unpaid sent/viewed invoices past due
    - One transaction per invoice; a failure never blocks the others
    - Idempotent: re-running the same day changes nothing

    Usage:
        worker = OverdueSweepWorker()
        result = await worker.run_once()

        # Run continuously
        await worker.run_forever()
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        batch_size: int = 500,
        clock: Callable[[], datetime] = datetime.utcnow,
        session_factory=None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            batch_size: Maximum invoices examined per run
            clock: Current time source
            session_factory: Existing async session factory (skips engine creation)
        """
        self.batch_size = batch_size
        self.clock = clock
        self.engine = None

        if session_factory is not None:
            self.async_session_factory = session_factory
        else:
            self.engine = create_async_engine(db_uri or ApplicationConfig.DB_URI, echo=False, future=True)
            self.async_session_factory = sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
            )

        logger.info("OverdueSweepWorker initialized")

    async def run_once(self, as_of: Optional[date] = None) -> OverdueSweepResultDTO:
        """
        Run one sweep

        Args:
            as_of: Date to compare due dates against (defaults to today)

        Returns:
            OverdueSweepResultDTO with counts
        """
        start_time = time.time()
        today = as_of or self.clock().date()

        async with self.async_session_factory() as session:
            candidates = await SqlAlchemyInvoiceRepository(session).get_overdue_candidates(
                today, limit=self.batch_size
            )
            targets = [(invoice.tenant_id, invoice.id) for invoice in candidates]

        logger.info(f"Found {len(targets)} overdue candidates as of {today.isoformat()}")

        marked = 0
        failed = 0

        for tenant_id, invoice_id in targets:
            async with self.async_session_factory() as invoice_session:
                use_case = MarkInvoiceOverdue(
                    uow=SqlAlchemyUnitOfWork(invoice_session),
                    invoice_repo=SqlAlchemyInvoiceRepository(invoice_session),
                    clock=lambda: datetime.combine(today, datetime.min.time()),
                )
                result = await use_case.execute(
                    MarkOverdueCommandDTO(tenant_id=tenant_id, invoice_id=invoice_id)
                )

            if result.is_err():
                failed += 1
                logger.error(
                    f"Failed to mark invoice {invoice_id} overdue for tenant {tenant_id}: "
                    f"{result.error.message}"
                )
            elif result.value:
                marked += 1
                logger.info(f"Invoice {invoice_id} for tenant {tenant_id} is now overdue")

        execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Overdue sweep complete: {marked}/{len(targets)} marked, "
            f"{failed} failed, {execution_time_ms}ms"
        )

        return OverdueSweepResultDTO(
            scanned=len(targets),
            marked_overdue=marked,
            failed=failed,
            as_of=today,
            execution_time_ms=execution_time_ms,
        )

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run the sweep continuously at a fixed interval

        Args:
            interval_seconds: Seconds between runs (default OVERDUE_SWEEP_INTERVAL_SECONDS)
        """
        interval_seconds = interval_seconds or ApplicationConfig.OVERDUE_SWEEP_INTERVAL_SECONDS
        logger.info(f"Starting continuous overdue sweep with {interval_seconds}s interval")

        while True:
            try:
                await self.run_once()
            except Exception as e:
                logger.error(f"Overdue sweep cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        if self.engine is not None:
            await self.engine.dispose()
        logger.info("OverdueSweepWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Sweep once as of today
        python -m src.worker.overdue_sweeper

        # Sweep as of a specific date
        python -m src.worker.overdue_sweeper --as-of 2025-03-01

        # Run continuously
        python -m src.worker.overdue_sweeper --continuous
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Sweep Worker")
    parser.add_argument("--as-of", type=date.fromisoformat, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("--continuous", action="store_true", help="Run continuously")
    args = parser.parse_args()

    if not ApplicationConfig.OVERDUE_SWEEP_ENABLED:
        logger.info("Overdue sweep disabled (OVERDUE_SWEEP_ENABLED=0)")
        return

    worker = OverdueSweepWorker()

    try:
        if args.continuous:
            await worker.run_forever()
        else:
            result = await worker.run_once(as_of=args.as_of)
            print(f"Overdue sweep complete:")
            print(f"  As of: {result.as_of.isoformat()}")
            print(f"  Scanned: {result.scanned}")
            print(f"  Marked overdue: {result.marked_overdue}")
            print(f"  Failed: {result.failed}")
            print(f"  Execution time: {result.execution_time_ms}ms")
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
