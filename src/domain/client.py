"""Client Domain Entity

Billing contact for jobs and invoices. Maintained by the client directory;
the invoicing workflow only reads it to snapshot billing details.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid


class Client(BaseModel, table=True):
    """
    Client - Tenant-scoped billing contact

    Domain Rules:
    - shortcode is exactly 4 uppercase letters when present
    - Invoices copy name/email/ABN/address at draft creation
    """

    __tablename__ = "clients"
    __table_args__ = (
        Index('ix_clients_tenant_id', 'tenant_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    tenant_id: str = Field(sa_column=Column(String(64), nullable=False))
    name: str = Field(sa_column=Column(String(255), nullable=False))
    email: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    abn: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
        description="Australian Business Number"
    )
    shortcode: Optional[str] = Field(
        default=None,
        sa_column=Column(String(4), nullable=True),
        description="4-letter code used in invoice display numbers (e.g., QNTS)"
    )

    address_street: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    address_city: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    address_state: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))
    address_postcode: Optional[str] = Field(default=None, sa_column=Column(String(20), nullable=True))
    address_country: Optional[str] = Field(default=None, sa_column=Column(String(100), nullable=True))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    created_by: Optional[str] = Field(default=None)

    def address(self) -> Optional[dict]:
        """Address as a dict, or None when no part is set"""
        parts = {
            "street": self.address_street,
            "city": self.address_city,
            "state": self.address_state,
            "postcode": self.address_postcode,
            "country": self.address_country,
        }
        if not any(parts.values()):
            return None
        return {key: value for key, value in parts.items() if value}
