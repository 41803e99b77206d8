"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Tenant and user
come from headers, never from the body.
"""

from datetime import date
from typing import Optional, List
from pydantic import BaseModel, Field


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating a draft invoice

    Used for POST /invoices endpoint.
    """

    client_id: str = Field(..., min_length=1, description="Client to bill")
    due_date: Optional[date] = Field(default=None, description="Payment due date")
    notes: Optional[str] = Field(default=None, description="Notes printed on the invoice")
    payment_instructions: Optional[str] = Field(default=None, description="How to pay")

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "9f1c2a7e0b6d4e3f8a5b1c2d3e4f5a6b",
                "due_date": "2025-02-14",
                "notes": "Thanks for your business",
            }
        }


class AddItemsRequestSchema(BaseModel):
    """
    Request schema for adding job items to a draft

    Used for POST /invoices/{invoice_id}/items endpoint. Emptiness and
    duplicates are checked by the use case.
    """

    job_item_ids: List[str] = Field(..., description="Job item IDs in display order")

    class Config:
        json_schema_extra = {
            "example": {"job_item_ids": ["a1b2c3d4e5f60718293a4b5c6d7e8f90"]}
        }


class UpdatePaymentRequestSchema(BaseModel):
    amount_paid_minor: int = Field(
        ...,
        description="Total amount paid so far, in minor units (0 to invoice total)"
    )

    class Config:
        json_schema_extra = {"example": {"amount_paid_minor": 22000}}
