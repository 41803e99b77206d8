"""Invoice Line Domain Entity

Snapshot of a job item's billing fields taken when it is added to an
invoice. Later edits to the job item never reach the line.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.job_item import JobItem
from src.domain.money import compute_line


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - Immutable snapshot of a job item

    Domain Rules:
    - Each line belongs to exactly one invoice
    - At most one line per job item per invoice
    - subtotal_minor = round_half_up(quantity * unit_price_minor)
    - total_minor = subtotal_minor + tax_minor
    - position keeps insertion order
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_position', 'invoice_id', 'position'),
        Index('ix_invoice_lines_invoice_job_item', 'invoice_id', 'job_item_id', unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice line identifier"
    )

    invoice_id: str = Field(
        sa_column=Column(String(64), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Insertion order within the invoice"
    )

    job_item_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Source job item"
    )

    job_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Job of the source item"
    )

    job_title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Job title at the time the line was added"
    )

    title: str = Field(sa_column=Column(String(255), nullable=False))

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    unit: str = Field(sa_column=Column(String(20), nullable=False))

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (e.g., hours, days, units)"
    )

    unit_price_minor: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Price per unit in minor units"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(6, 4), nullable=False),
        description="Tax rate applied (0.10 = 10%, 0 when untaxed)"
    )

    subtotal_minor: int = Field(sa_column=Column(BigInteger, nullable=False))
    tax_minor: int = Field(sa_column=Column(BigInteger, nullable=False))
    total_minor: int = Field(sa_column=Column(BigInteger, nullable=False))

    created_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def snapshot(
        cls,
        invoice_id: str,
        position: int,
        item: JobItem,
        job_title: str,
        tax_rate: Decimal,
    ) -> "InvoiceLine":
        """Build a line from a job item and the tenant's tax rate"""
        amounts = compute_line(item.quantity, item.unit_price_minor, item.tax_applicable, tax_rate)
        return cls(
            invoice_id=invoice_id,
            position=position,
            job_item_id=item.id,
            job_id=item.job_id,
            job_title=job_title,
            title=item.title,
            description=item.description,
            unit=item.unit.value,
            quantity=Decimal(str(item.quantity)),
            unit_price_minor=item.unit_price_minor,
            tax_rate=amounts.tax_rate,
            subtotal_minor=amounts.subtotal_minor,
            tax_minor=amounts.tax_minor,
            total_minor=amounts.total_minor,
        )
