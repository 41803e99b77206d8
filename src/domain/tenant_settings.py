"""Tenant Settings Domain Entity

Business and tax settings for one tenant. The invoicing workflow reads the
default tax rate when snapshotting lines.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String, Text
from src.domain.base import BaseModel


class TaxType(str, Enum):
    GST = "GST"
    VAT = "VAT"
    SALES_TAX = "Sales Tax"
    NONE = "None"


class TenantSettings(BaseModel, table=True):
    """
    Tenant Settings - One row per tenant

    Domain Rules:
    - default_tax_rate is a fraction (0.10 = 10%)
    - TaxType.NONE means no tax is charged regardless of item flags
    """

    __tablename__ = "tenant_settings"

    tenant_id: str = Field(primary_key=True)

    business_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    abn: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    tax_type: TaxType = Field(default=TaxType.GST)
    default_tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(6, 4), nullable=False),
        description="Default tax rate as a fraction (precision: 6,4)"
    )

    bank_account_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    bank_bsb: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    bank_account_number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    invoice_terms: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    invoice_footer: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    updated_at: datetime = Field(default_factory=datetime.utcnow)
    updated_by: Optional[str] = Field(default=None)

    @property
    def effective_tax_rate(self) -> Decimal:
        if self.tax_type == TaxType.NONE:
            return Decimal("0")
        return Decimal(str(self.default_tax_rate or 0))

    @property
    def tax_label(self) -> str:
        return self.tax_type.value
