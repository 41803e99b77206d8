"""Request schemas for Job Item API"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.job_item import BillableUnit


class CreateJobItemRequestSchema(BaseModel):
    """
    Request schema for creating a job item

    Used for POST /job-items endpoint.
    """

    job_id: str = Field(..., min_length=1, description="Job the item is billed against")
    title: str = Field(..., min_length=1, max_length=255, description="Line title")
    description: Optional[str] = Field(default=None, description="Longer description")
    unit: BillableUnit = Field(default=BillableUnit.HOUR, description="Billable unit")
    quantity: Decimal = Field(..., description="Quantity (must be > 0)")
    unit_price_minor: int = Field(..., description="Price per unit in cents (must be >= 0)")
    tax_applicable: bool = Field(default=True, description="Apply the tenant tax rate")

    class Config:
        json_schema_extra = {
            "example": {
                "job_id": "5e6f7a8b9c0d4e1f2a3b4c5d6e7f8a9b",
                "title": "Site inspection",
                "unit": "hour",
                "quantity": "2",
                "unit_price_minor": 10000,
            }
        }


class UpdateJobItemRequestSchema(BaseModel):
    """Used for PATCH /job-items/{job_item_id}; omitted fields are unchanged"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    unit: Optional[BillableUnit] = None
    quantity: Optional[Decimal] = None
    unit_price_minor: Optional[int] = None
    tax_applicable: Optional[bool] = None
