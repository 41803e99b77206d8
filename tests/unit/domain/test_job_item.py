"""Unit tests for the job item lock state machine"""

import pytest
from datetime import datetime
from decimal import Decimal
from src.domain.errors import PreconditionFailedError, ValidationFailedError, ErrorKind
from src.domain.job_item import JobItem, ItemStatus, ItemLock
from tests.factories import make_job_item

LOCKED_AT = datetime(2025, 3, 1, 10, 0, 0)


class TestJobItemDefaults:
    def test_new_item_is_open_and_unlocked(self):
        item = make_job_item()

        assert item.status == ItemStatus.OPEN
        assert item.lock is None
        assert item.is_locked is False

    def test_tax_applicable_defaults_to_true(self):
        item = JobItem(
            tenant_id="tenant_123",
            job_id="job_1",
            client_id="client_1",
            title="Call-out fee",
            quantity=Decimal("1"),
            unit_price_minor=8000,
        )

        assert item.tax_applicable is True


class TestSelect:
    """open -> selected"""

    def test_select_locks_item_to_invoice(self):
        # Arrange
        item = make_job_item()

        # Act
        item.select_for("inv_1", LOCKED_AT)

        # Assert
        assert item.status == ItemStatus.SELECTED
        assert item.lock == ItemLock(invoice_id="inv_1", at=LOCKED_AT)
        assert item.is_locked_to("inv_1")

    def test_select_already_locked_item_fails(self):
        """
        Given: Item already selected on another invoice
        When: A second invoice tries to select it
        Then: PreconditionFailed 'already locked' and the lock is unchanged
        """
        item = make_job_item()
        item.select_for("inv_1", LOCKED_AT)

        with pytest.raises(PreconditionFailedError) as exc_info:
            item.select_for("inv_2", datetime(2025, 3, 2))

        assert exc_info.value.code == "JOB_ITEM_ALREADY_LOCKED"
        assert "already locked" in exc_info.value.message
        assert exc_info.value.kind == ErrorKind.PRECONDITION_FAILED
        assert item.lock_invoice_id == "inv_1"
        assert item.locked_at == LOCKED_AT

    def test_select_invoiced_item_fails(self):
        item = make_job_item()
        item.select_for("inv_1", LOCKED_AT)
        item.mark_invoiced()

        with pytest.raises(PreconditionFailedError):
            item.select_for("inv_2", LOCKED_AT)

        assert item.status == ItemStatus.INVOICED

    def test_select_unlocked_item_that_is_not_open_fails(self):
        item = make_job_item(status=ItemStatus.INVOICED)

        with pytest.raises(PreconditionFailedError) as exc_info:
            item.select_for("inv_1", LOCKED_AT)

        assert exc_info.value.code == "JOB_ITEM_NOT_AVAILABLE"


class TestInvoiceAndRelease:
    def test_mark_invoiced_keeps_lock(self):
        item = make_job_item()
        item.select_for("inv_1", LOCKED_AT)

        item.mark_invoiced()

        assert item.status == ItemStatus.INVOICED
        assert item.lock_invoice_id == "inv_1"
        assert item.locked_at == LOCKED_AT

    def test_release_clears_lock(self):
        item = make_job_item()
        item.select_for("inv_1", LOCKED_AT)

        item.release()

        assert item.status == ItemStatus.OPEN
        assert item.lock is None

    def test_invoiced_item_cannot_be_released(self):
        item = make_job_item()
        item.select_for("inv_1", LOCKED_AT)
        item.mark_invoiced()

        with pytest.raises(PreconditionFailedError) as exc_info:
            item.release()

        assert exc_info.value.code == "INVALID_ITEM_TRANSITION"
        assert item.status == ItemStatus.INVOICED

    def test_open_item_cannot_be_invoiced_directly(self):
        item = make_job_item()

        with pytest.raises(PreconditionFailedError):
            item.mark_invoiced()

    @pytest.mark.parametrize("steps", [[], ["select"], ["select", "invoice"], ["select", "release"]])
    def test_lock_present_iff_selected_or_invoiced(self, steps):
        item = make_job_item()
        for step in steps:
            if step == "select":
                item.select_for("inv_1", LOCKED_AT)
            elif step == "invoice":
                item.mark_invoiced()
            else:
                item.release()

        locked_statuses = {ItemStatus.SELECTED, ItemStatus.INVOICED}
        assert (item.lock is not None) == (item.status in locked_statuses)


class TestEditPolicy:
    def test_open_item_is_editable(self):
        make_job_item().ensure_editable()

    @pytest.mark.parametrize("invoice", [False, True])
    def test_locked_item_is_not_editable(self, invoice):
        item = make_job_item()
        item.select_for("inv_1", LOCKED_AT)
        if invoice:
            item.mark_invoiced()

        with pytest.raises(PreconditionFailedError) as exc_info:
            item.ensure_editable()

        assert exc_info.value.code == "JOB_ITEM_LOCKED"

    @pytest.mark.parametrize("quantity", [Decimal("0"), Decimal("-1")])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(ValidationFailedError) as exc_info:
            JobItem.validate_amounts(quantity, 100)

        assert exc_info.value.code == "INVALID_QUANTITY"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            JobItem.validate_amounts(Decimal("1"), -1)

        assert exc_info.value.code == "INVALID_UNIT_PRICE"

    def test_zero_price_and_fractional_quantity_accepted(self):
        JobItem.validate_amounts(Decimal("0.25"), 0)
