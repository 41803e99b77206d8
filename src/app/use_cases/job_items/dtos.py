"""Data Transfer Objects for Job Item Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.job_item import JobItem, BillableUnit, ItemStatus, billable_unit_label
from src.domain.money import line_subtotal


class CreateJobItemCommandDTO(BaseModel):
    """
    Command DTO for creating a job item

    quantity and unit_price_minor are checked by the use case so invalid
    values come back as VALIDATION_FAILED rather than a schema error.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    user_id: str = Field(..., description="User creating the item")
    job_id: str = Field(..., description="Job the item is billed against")
    title: str = Field(..., min_length=1, max_length=255, description="Line title")
    description: Optional[str] = Field(default=None, description="Optional longer description")
    unit: BillableUnit = Field(default=BillableUnit.HOUR, description="Billable unit")
    quantity: Decimal = Field(..., description="Quantity (> 0)")
    unit_price_minor: int = Field(..., description="Price per unit in minor units (>= 0)")
    tax_applicable: bool = Field(default=True, description="Whether the tenant tax rate applies")

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "user_id": "user_123",
                "job_id": "5e6f7a8b9c0d4e1f2a3b4c5d6e7f8a9b",
                "title": "Site inspection",
                "unit": "hour",
                "quantity": "2",
                "unit_price_minor": 10000,
                "tax_applicable": True,
            }
        }


class UpdateJobItemCommandDTO(BaseModel):
    """Partial update; fields left as None are unchanged"""

    tenant_id: str
    job_item_id: str
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    unit: Optional[BillableUnit] = None
    quantity: Optional[Decimal] = None
    unit_price_minor: Optional[int] = None
    tax_applicable: Optional[bool] = None


class JobItemResponseDTO(BaseModel):
    id: str
    job_id: str
    client_id: str
    title: str
    description: Optional[str] = None
    unit: BillableUnit
    unit_label: str
    quantity: Decimal
    unit_price_minor: int
    subtotal_minor: int = Field(..., description="quantity x unit price, before tax")
    tax_applicable: bool
    status: ItemStatus
    lock_invoice_id: Optional[str] = None
    locked_at: Optional[datetime] = None
    job_title: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def from_entity(cls, item: JobItem, job_title: Optional[str] = None) -> "JobItemResponseDTO":
        return cls(
            id=item.id,
            job_id=item.job_id,
            client_id=item.client_id,
            title=item.title,
            description=item.description,
            unit=item.unit,
            unit_label=billable_unit_label(item.unit, item.quantity),
            quantity=item.quantity,
            unit_price_minor=item.unit_price_minor,
            subtotal_minor=line_subtotal(item.quantity, item.unit_price_minor),
            tax_applicable=item.tax_applicable,
            status=item.status,
            lock_invoice_id=item.lock_invoice_id,
            locked_at=item.locked_at,
            job_title=job_title,
            created_at=item.created_at,
            updated_at=item.updated_at,
            version=item.version,
        )


class ListJobItemsResponseDTO(BaseModel):
    items: List[JobItemResponseDTO] = Field(..., description="Job items, newest first")
    total: int = Field(..., description="Number of items")
