"""Unit tests for write-conflict detection in SqlAlchemyUnitOfWork"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


def integrity_error(text: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(text))


@pytest.fixture
def uow():
    return SqlAlchemyUnitOfWork(MagicMock())


@pytest.mark.parametrize(
    "text",
    [
        "UNIQUE constraint failed: invoice_counters.tenant_id, invoice_counters.year",
        "UNIQUE constraint failed: invoice_lines.invoice_id, invoice_lines.job_item_id",
        'duplicate key value violates unique constraint "ix_invoice_counters_tenant_year"',
        'duplicate key value violates unique constraint "ix_invoice_lines_invoice_job_item"',
    ],
)
def test_race_prone_unique_violations_are_conflicts(uow, text):
    assert uow.is_conflict(integrity_error(text)) is True


@pytest.mark.parametrize(
    "text",
    [
        "NOT NULL constraint failed: job_items.title",
        'null value in column "title" of relation "job_items" violates not-null constraint',
        "UNIQUE constraint failed: invoices.tenant_id, invoices.invoice_number",
        "FOREIGN KEY constraint failed",
    ],
)
def test_other_integrity_errors_are_not_conflicts(uow, text):
    assert uow.is_conflict(integrity_error(text)) is False


def test_stale_row_is_conflict(uow):
    assert uow.is_conflict(StaleDataError("UPDATE statement on table 'invoices' expected 1 row")) is True


def test_locked_database_is_conflict(uow):
    error = OperationalError("UPDATE ...", {}, Exception("database is locked"))

    assert uow.is_conflict(error) is True


def test_plain_errors_are_not_conflicts(uow):
    assert uow.is_conflict(OperationalError("SELECT ...", {}, Exception("no such table: invoices"))) is False
    assert uow.is_conflict(RuntimeError("boom")) is False
