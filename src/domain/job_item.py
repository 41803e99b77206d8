"""Job Item Domain Entity

A billable unit of work and its invoice lock.

Lifecycle:
    open --(added to draft)--> selected --(invoice issued)--> invoiced
    selected --(removed / draft voided or deleted)--> open

The lock is an application-level exclusivity marker. Races on it are
prevented by the surrounding database transaction and the optimistic
version column, not by the marker itself.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.errors import PreconditionFailedError, ValidationFailedError


class BillableUnit(str, Enum):
    """Billable unit types"""
    HOUR = "hour"
    HALF_DAY = "half_day"
    DAY = "day"
    UNIT = "unit"
    EXPENSE = "expense"


class ItemStatus(str, Enum):
    """Job item status for invoice locking"""
    OPEN = "open"            # Available to bill, editable
    SELECTED = "selected"    # Locked to one draft invoice
    INVOICED = "invoiced"    # Locked to an issued invoice, permanently


ALLOWED_TRANSITIONS = {
    ItemStatus.OPEN: {ItemStatus.SELECTED},
    ItemStatus.SELECTED: {ItemStatus.INVOICED, ItemStatus.OPEN},
    ItemStatus.INVOICED: set(),
}

_UNIT_LABELS = {
    BillableUnit.HOUR: ("hour", "hours"),
    BillableUnit.HALF_DAY: ("half day", "half days"),
    BillableUnit.DAY: ("day", "days"),
    BillableUnit.UNIT: ("unit", "units"),
}


def billable_unit_label(unit: BillableUnit, quantity: Decimal = Decimal("1")) -> str:
    """Display label for a unit; expenses have no unit"""
    if unit == BillableUnit.EXPENSE:
        return "-"
    singular, plural = _UNIT_LABELS[unit]
    return singular if Decimal(str(quantity)) == 1 else plural


@dataclass(frozen=True)
class ItemLock:
    invoice_id: str
    at: datetime


job_item_version = Column("version", Integer, nullable=False)


class JobItem(BaseModel, table=True):
    """
    Job Item - Billable unit of work

    Domain Rules:
    - quantity > 0, unit_price_minor >= 0
    - lock is present iff status is selected or invoiced
    - Only open items may be edited or deleted
    - tax_applicable is written explicitly (default True); legacy rows
      without the flag are back-filled to True
    """

    __tablename__ = "job_items"
    __table_args__ = (
        Index('ix_job_items_tenant_job', 'tenant_id', 'job_id'),
        Index('ix_job_items_tenant_client_status', 'tenant_id', 'client_id', 'status'),
    )
    __mapper_args__ = {"version_id_col": job_item_version}

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique job item identifier"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Tenant ID"
    )

    job_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Job this item is billed against"
    )

    client_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Client ID (denormalized from the job for querying)"
    )

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Short title shown on the invoice line"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Optional longer description"
    )

    unit: BillableUnit = Field(
        default=BillableUnit.HOUR,
        description="Billable unit (hour, half_day, day, unit, expense)"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (must be > 0, may be fractional)"
    )

    unit_price_minor: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Price per unit in minor units (cents)"
    )

    tax_applicable: bool = Field(
        default=True,
        description="Whether the tenant tax rate applies to this item"
    )

    status: ItemStatus = Field(
        default=ItemStatus.OPEN,
        description="Lock status (open, selected, invoiced)"
    )

    lock_invoice_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True, index=True),
        description="Invoice holding the lock (set when selected or invoiced)"
    )

    locked_at: Optional[datetime] = Field(
        default=None,
        description="When the lock was taken"
    )

    version: int = Field(
        default=1,
        sa_column=job_item_version,
        description="Optimistic concurrency version"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    created_by: Optional[str] = Field(default=None)

    @property
    def lock(self) -> Optional[ItemLock]:
        if self.lock_invoice_id is None:
            return None
        return ItemLock(invoice_id=self.lock_invoice_id, at=self.locked_at)

    @property
    def is_locked(self) -> bool:
        return self.lock_invoice_id is not None

    def _transition(self, target: ItemStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise PreconditionFailedError(
                "INVALID_ITEM_TRANSITION",
                f'Job item "{self.title}" cannot move from {self.status.value} to {target.value}',
            )
        self.status = target
        self.updated_at = datetime.utcnow()

    def select_for(self, invoice_id: str, at: datetime) -> None:
        """open -> selected, locking the item to a draft invoice"""
        if self.is_locked:
            target = "this invoice" if self.is_locked_to(invoice_id) else "another invoice"
            raise PreconditionFailedError(
                "JOB_ITEM_ALREADY_LOCKED",
                f'Job item "{self.title}" is already locked to {target}',
            )
        if self.status != ItemStatus.OPEN:
            raise PreconditionFailedError(
                "JOB_ITEM_NOT_AVAILABLE",
                f'Job item "{self.title}" is not available (status: {self.status.value})',
            )
        self._transition(ItemStatus.SELECTED)
        self.lock_invoice_id = invoice_id
        self.locked_at = at

    def mark_invoiced(self) -> None:
        """selected -> invoiced; the lock is kept unchanged"""
        self._transition(ItemStatus.INVOICED)

    def release(self) -> None:
        """selected -> open, clearing the lock"""
        self._transition(ItemStatus.OPEN)
        self.lock_invoice_id = None
        self.locked_at = None

    def is_locked_to(self, invoice_id: str) -> bool:
        return self.lock_invoice_id == invoice_id

    def ensure_editable(self) -> None:
        """Generic edit/delete is only allowed while the item is open"""
        if self.status != ItemStatus.OPEN or self.is_locked:
            raise PreconditionFailedError(
                "JOB_ITEM_LOCKED",
                "Cannot modify job item that is selected or invoiced",
            )

    @staticmethod
    def validate_amounts(quantity: Optional[Decimal], unit_price_minor: Optional[int]) -> None:
        """Reject, never clamp, invalid quantity and price"""
        if quantity is not None and Decimal(str(quantity)) <= 0:
            raise ValidationFailedError("INVALID_QUANTITY", "Quantity must be greater than 0")
        if unit_price_minor is not None and unit_price_minor < 0:
            raise ValidationFailedError("INVALID_UNIT_PRICE", "Unit price cannot be negative")
