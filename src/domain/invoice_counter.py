"""Invoice Counter Domain Entity

Per-tenant, per-year sequence backing invoice numbers.
"""

from datetime import datetime
from sqlmodel import Field, Column, Index
from sqlalchemy import Integer, String
from src.domain.base import BaseModel, generate_uuid


def format_invoice_number(year: int, number: int) -> str:
    """2025, 1 -> '2025-001'"""
    return f"{year}-{number:03d}"


invoice_counter_version = Column("version", Integer, nullable=False)


class InvoiceCounter(BaseModel, table=True):
    """
    Invoice Counter - Last number issued for (tenant, year)

    Domain Rules:
    - One row per (tenant_id, year), created lazily on first issuance
    - last_number only increases, by exactly 1 per issued invoice
    - Updated only inside the issuing transaction
    """

    __tablename__ = "invoice_counters"
    __table_args__ = (
        Index('ix_invoice_counters_tenant_year', 'tenant_id', 'year', unique=True),
    )
    __mapper_args__ = {"version_id_col": invoice_counter_version}

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Tenant ID"
    )

    year: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Calendar year of issuance"
    )

    last_number: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Last number assigned this year"
    )

    version: int = Field(
        default=1,
        sa_column=invoice_counter_version,
        description="Optimistic concurrency version"
    )

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def key(self) -> str:
        """Document-style key, e.g. invoices-2025"""
        return f"invoices-{self.year}"

    def advance(self) -> int:
        self.last_number += 1
        self.updated_at = datetime.utcnow()
        return self.last_number
