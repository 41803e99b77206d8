"""Invoice Domain Entity

Aggregate root of the billing workflow. Lines are stored as InvoiceLine
rows; the invoice row carries the totals derived from them.
"""

import secrets
import string
from datetime import datetime, date
from enum import Enum
from typing import List, Optional, Sequence
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Date, Integer, JSON, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.errors import PreconditionFailedError, ValidationFailedError
from src.domain.invoice_line import InvoiceLine
from src.domain.money import TaxBreakdownEntry, aggregate_totals, balance_due


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    OVERDUE = "overdue"
    VOID = "void"


_PAYMENT_STATUSES = {
    InvoiceStatus.SENT,
    InvoiceStatus.VIEWED,
    InvoiceStatus.PARTIALLY_PAID,
    InvoiceStatus.PAID,
    InvoiceStatus.OVERDUE,
}

ALLOWED_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.VOID},
    InvoiceStatus.SENT: _PAYMENT_STATUSES | {InvoiceStatus.VOID},
    InvoiceStatus.VIEWED: (_PAYMENT_STATUSES - {InvoiceStatus.SENT}) | {InvoiceStatus.VOID},
    InvoiceStatus.PARTIALLY_PAID: _PAYMENT_STATUSES | {InvoiceStatus.VOID},
    InvoiceStatus.PAID: _PAYMENT_STATUSES | {InvoiceStatus.VOID},
    InvoiceStatus.OVERDUE: _PAYMENT_STATUSES | {InvoiceStatus.VOID},
    InvoiceStatus.VOID: set(),
}

_DISPLAY_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_public_token() -> str:
    """Random token for unauthenticated read access (64 hex chars)"""
    return secrets.token_hex(32)


def generate_invoice_code() -> str:
    """Random 5-character uppercase alphanumeric code"""
    return "".join(secrets.choice(_DISPLAY_CODE_ALPHABET) for _ in range(5))


def format_invoice_display_number(shortcode: str, code: str) -> str:
    return f"{shortcode.upper()}-{code}"


def derive_payment_status(
    current: InvoiceStatus,
    total_minor: int,
    amount_paid_minor: int,
    due_date: Optional[date],
    today: date,
    viewed: bool = False,
) -> InvoiceStatus:
    """
    Status implied by a payment amount

    Order: fully paid, partially paid, overdue, otherwise the invoice's
    post-draft baseline (viewed if it was ever viewed, else sent).
    Draft and void invoices keep their status.
    """
    if current in (InvoiceStatus.DRAFT, InvoiceStatus.VOID):
        return current

    if balance_due(total_minor, amount_paid_minor) == 0:
        return InvoiceStatus.PAID

    if amount_paid_minor > 0:
        return InvoiceStatus.PARTIALLY_PAID

    if due_date is not None and today > due_date:
        return InvoiceStatus.OVERDUE

    return InvoiceStatus.VIEWED if viewed else InvoiceStatus.SENT


invoice_version = Column("version", Integer, nullable=False)


class Invoice(BaseModel, table=True):
    """
    Invoice - Tenant invoice for one client

    Domain Rules:
    - total_minor = subtotal_minor + tax_minor
    - balance_due_minor = total_minor - amount_paid_minor, 0 <= amount_paid_minor <= total_minor
    - Lines change only while status is draft
    - invoice_number is assigned once, at draft -> sent, and never changes
    - Status transitions follow ALLOWED_TRANSITIONS; void is terminal
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_tenant_status', 'tenant_id', 'status'),
        Index('ix_invoices_tenant_number', 'tenant_id', 'invoice_number', unique=True),
        Index('ix_invoices_public_token', 'public_token', unique=True),
    )
    __mapper_args__ = {"version_id_col": invoice_version}

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Tenant ID"
    )

    client_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Client being billed"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="Sequential number per tenant/year (e.g., 2025-001), set at issue"
    )

    invoice_display_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="Client-facing number (e.g., QNTS-5TU72), set at issue"
    )

    issue_date: Optional[datetime] = Field(default=None, description="When the invoice was issued")

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    viewed_at: Optional[datetime] = Field(default=None, description="First public view")

    subtotal_minor: int = Field(default=0, sa_column=Column(BigInteger, nullable=False))
    tax_minor: int = Field(default=0, sa_column=Column(BigInteger, nullable=False))
    total_minor: int = Field(default=0, sa_column=Column(BigInteger, nullable=False))
    amount_paid_minor: int = Field(default=0, sa_column=Column(BigInteger, nullable=False))
    balance_due_minor: int = Field(default=0, sa_column=Column(BigInteger, nullable=False))

    tax_breakdown: List[dict] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="[{rate, taxable_amount_minor, tax_minor}] grouped by rate"
    )

    # Client snapshot, copied at draft creation
    client_name: str = Field(sa_column=Column(String(255), nullable=False))
    client_email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    client_abn: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    client_shortcode: Optional[str] = Field(default=None, sa_column=Column(String(4), nullable=True))
    client_address: Optional[dict] = Field(default=None, sa_column=Column(JSON, nullable=True))

    public_token: str = Field(
        default_factory=generate_public_token,
        sa_column=Column(String(64), nullable=False),
        description="Opaque token for public read-only access"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    payment_instructions: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    version: int = Field(
        default=1,
        sa_column=invoice_version,
        description="Optimistic concurrency version"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    created_by: Optional[str] = Field(default=None)
    issued_by: Optional[str] = Field(default=None)

    @property
    def is_draft(self) -> bool:
        return self.status == InvoiceStatus.DRAFT

    def breakdown(self) -> List[TaxBreakdownEntry]:
        return [TaxBreakdownEntry.from_dict(entry) for entry in self.tax_breakdown or []]

    def _transition(self, target: InvoiceStatus) -> None:
        if target == self.status:
            return
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise PreconditionFailedError(
                "INVALID_INVOICE_TRANSITION",
                f"Invoice cannot move from {self.status.value} to {target.value}",
            )
        self.status = target

    def ensure_draft(self, message: str) -> None:
        if self.status != InvoiceStatus.DRAFT:
            raise PreconditionFailedError("INVOICE_NOT_DRAFT", message)

    def apply_lines(self, lines: Sequence[InvoiceLine]) -> None:
        """Recompute totals, breakdown and balance from the full line set"""
        totals = aggregate_totals(lines)
        self.subtotal_minor = totals.subtotal_minor
        self.tax_minor = totals.tax_minor
        self.total_minor = totals.total_minor
        self.tax_breakdown = [entry.to_dict() for entry in totals.tax_breakdown]
        self.balance_due_minor = balance_due(self.total_minor, self.amount_paid_minor)
        self.updated_at = datetime.utcnow()

    def issue(
        self,
        invoice_number: str,
        issued_by: str,
        at: datetime,
        line_count: int,
        display_number: Optional[str] = None,
    ) -> None:
        self.ensure_draft("Only draft invoices can be issued")
        if line_count == 0:
            raise PreconditionFailedError(
                "INVOICE_HAS_NO_LINES", "Cannot issue an invoice with no line items"
            )
        if self.invoice_number is not None:
            raise PreconditionFailedError(
                "INVOICE_ALREADY_NUMBERED", "Invoice number has already been assigned"
            )
        self._transition(InvoiceStatus.SENT)
        self.invoice_number = invoice_number
        self.invoice_display_number = display_number
        self.issue_date = at
        self.issued_by = issued_by
        self.updated_at = at

    def record_payment(self, amount_paid_minor: int, today: date) -> None:
        if self.status in (InvoiceStatus.DRAFT, InvoiceStatus.VOID):
            raise PreconditionFailedError(
                "INVOICE_NOT_PAYABLE", "Cannot update payment for draft or void invoices"
            )
        if amount_paid_minor < 0 or amount_paid_minor > self.total_minor:
            raise ValidationFailedError(
                "INVALID_PAYMENT_AMOUNT",
                f"Invalid payment amount: must be between 0 and {self.total_minor}",
            )
        self.amount_paid_minor = amount_paid_minor
        self.balance_due_minor = balance_due(self.total_minor, amount_paid_minor)
        self._transition(
            derive_payment_status(
                self.status,
                self.total_minor,
                amount_paid_minor,
                self.due_date,
                today,
                viewed=self.viewed_at is not None,
            )
        )
        self.updated_at = datetime.utcnow()

    def refresh_overdue(self, today: date) -> bool:
        """Re-derive status for an unpaid invoice; True when it became overdue"""
        if self.status not in (InvoiceStatus.SENT, InvoiceStatus.VIEWED):
            return False
        derived = derive_payment_status(
            self.status,
            self.total_minor,
            self.amount_paid_minor,
            self.due_date,
            today,
            viewed=self.viewed_at is not None,
        )
        if derived != InvoiceStatus.OVERDUE:
            return False
        self._transition(derived)
        self.updated_at = datetime.utcnow()
        return True

    def void(self) -> InvoiceStatus:
        """Mark void; returns the status the invoice had before"""
        if self.status == InvoiceStatus.VOID:
            raise PreconditionFailedError("INVOICE_ALREADY_VOID", "Invoice is already void")
        previous = self.status
        self._transition(InvoiceStatus.VOID)
        self.updated_at = datetime.utcnow()
        return previous

    def mark_viewed(self, at: datetime) -> bool:
        """sent -> viewed on first public read; False when nothing changed"""
        if self.status != InvoiceStatus.SENT or self.viewed_at is not None:
            return False
        self._transition(InvoiceStatus.VIEWED)
        self.viewed_at = at
        self.updated_at = at
        return True

    def is_overdue(self, today: date) -> bool:
        if self.due_date is None:
            return False
        if self.status in (InvoiceStatus.PAID, InvoiceStatus.VOID, InvoiceStatus.DRAFT):
            return False
        return today > self.due_date

    def days_overdue(self, today: date) -> int:
        if self.due_date is None or today <= self.due_date:
            return 0
        return (today - self.due_date).days
