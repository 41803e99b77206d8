from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

# Unique indexes two concurrent transactions can both try to satisfy:
# index name as PostgreSQL reports it, column list as SQLite reports it.
RACE_UNIQUE_INDEXES = (
    ("ix_invoice_counters_tenant_year", "invoice_counters.tenant_id, invoice_counters.year"),
    ("ix_invoice_lines_invoice_job_item", "invoice_lines.invoice_id, invoice_lines.job_item_id"),
)


def _error_text(error) -> str:
    orig = getattr(error, "orig", None)
    return str(orig if orig is not None else error)


def is_race_unique_violation(error: IntegrityError) -> bool:
    """True for a duplicate on a race-prone unique index; False for NOT NULL, FK and others"""
    text = _error_text(error)
    return any(name in text or columns in text for name, columns in RACE_UNIQUE_INDEXES)


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    def is_conflict(self, error: Exception) -> bool:
        # Version mismatch on UPDATE/DELETE
        if isinstance(error, StaleDataError):
            return True
        # Lazy counter insert or the same item added twice at once
        if isinstance(error, IntegrityError):
            return is_race_unique_violation(error)
        # SQLite writer contention past the busy timeout; PostgreSQL
        # serialization failures and deadlocks
        if isinstance(error, OperationalError):
            text = _error_text(error).lower()
            return (
                "database is locked" in text
                or "could not serialize" in text
                or "deadlock detected" in text
            )
        return False
