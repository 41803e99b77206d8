"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List, Sequence
from pydantic import BaseModel, Field
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.job_item import BillableUnit, billable_unit_label
from src.domain.money import TaxBreakdownEntry, format_minor_units, format_tax_rate
from src.domain.tenant_settings import TenantSettings


class CreateDraftInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating a draft invoice

    Used as input to CreateDraftInvoice use case.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    user_id: str = Field(..., description="User creating the draft")
    client_id: str = Field(..., description="Client to bill")
    due_date: Optional[date] = Field(default=None, description="Payment due date")
    notes: Optional[str] = Field(default=None, description="Notes printed on the invoice")
    payment_instructions: Optional[str] = Field(
        default=None,
        description="Payment instructions printed on the invoice"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "user_id": "user_123",
                "client_id": "9f1c2a7e0b6d4e3f8a5b1c2d3e4f5a6b",
                "due_date": "2025-02-14",
                "notes": "Thanks for your business",
            }
        }


class AddItemsCommandDTO(BaseModel):
    """
    Command DTO for adding job items to a draft invoice

    Items are appended in the order given.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Draft invoice ID")
    job_item_ids: List[str] = Field(..., description="Job items to add, in display order")

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "invoice_id": "3b0f6c1d2e4a4b5c9d8e7f6a5b4c3d2e",
                "job_item_ids": ["a1b2c3d4e5f60718293a4b5c6d7e8f90"],
            }
        }


class RemoveItemCommandDTO(BaseModel):
    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Draft invoice ID")
    job_item_id: str = Field(..., description="Job item whose line is removed")


class IssueInvoiceCommandDTO(BaseModel):
    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Draft invoice ID")
    user_id: str = Field(..., description="User issuing the invoice")


class UpdatePaymentCommandDTO(BaseModel):
    """
    Command DTO for recording the total amount paid so far

    amount_paid_minor replaces (does not add to) the stored amount.
    """

    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Issued invoice ID")
    amount_paid_minor: int = Field(..., description="Total amount paid, in minor units (cents)")

    class Config:
        json_schema_extra = {
            "example": {
                "tenant_id": "tenant_xyz789",
                "invoice_id": "3b0f6c1d2e4a4b5c9d8e7f6a5b4c3d2e",
                "amount_paid_minor": 22000,
            }
        }


class VoidInvoiceCommandDTO(BaseModel):
    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Invoice ID")
    requester_role: str = Field(..., description="Tenant role of the requester (owner, staff)")


class DeleteDraftInvoiceCommandDTO(BaseModel):
    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Draft invoice ID")


class ListInvoicesQueryDTO(BaseModel):
    tenant_id: str = Field(..., description="Tenant identifier")
    status: Optional[InvoiceStatus] = Field(default=None, description="Optional status filter")
    limit: int = Field(default=20, ge=1, le=100, description="Page size")
    offset: int = Field(default=0, ge=0, description="Page offset")


class TaxBreakdownDTO(BaseModel):
    rate: Decimal = Field(..., description="Tax rate as a fraction (0.1 = 10%)")
    taxable_amount_minor: int = Field(..., description="Sum of line subtotals at this rate")
    tax_minor: int = Field(..., description="Sum of line taxes at this rate")

    @classmethod
    def from_entry(cls, entry: TaxBreakdownEntry) -> "TaxBreakdownDTO":
        return cls(
            rate=entry.rate,
            taxable_amount_minor=entry.taxable_amount_minor,
            tax_minor=entry.tax_minor,
        )


class InvoiceLineDTO(BaseModel):
    """
    Invoice line snapshot

    Amounts are in minor units; quantity and tax_rate are decimals.
    """

    id: str
    position: int
    job_item_id: str
    job_id: str
    job_title: str
    title: str
    description: Optional[str] = None
    unit: str
    quantity: Decimal
    unit_price_minor: int
    tax_rate: Decimal
    subtotal_minor: int
    tax_minor: int
    total_minor: int

    @classmethod
    def from_entity(cls, line: InvoiceLine) -> "InvoiceLineDTO":
        return cls(
            id=line.id,
            position=line.position,
            job_item_id=line.job_item_id,
            job_id=line.job_id,
            job_title=line.job_title,
            title=line.title,
            description=line.description,
            unit=line.unit,
            quantity=line.quantity,
            unit_price_minor=line.unit_price_minor,
            tax_rate=line.tax_rate,
            subtotal_minor=line.subtotal_minor,
            tax_minor=line.tax_minor,
            total_minor=line.total_minor,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by every invoice use case that yields the aggregate.
    locked_job_item_ids always equals the job item IDs of the lines.
    """

    id: str = Field(..., description="Invoice ID")
    tenant_id: str = Field(..., description="Tenant identifier")
    client_id: str = Field(..., description="Client ID")
    status: InvoiceStatus = Field(..., description="Invoice status")
    invoice_number: Optional[str] = Field(default=None, description="Sequential number, e.g. 2025-001")
    invoice_display_number: Optional[str] = Field(default=None, description="Client-facing number")
    issue_date: Optional[datetime] = None
    due_date: Optional[date] = None
    viewed_at: Optional[datetime] = None

    subtotal_minor: int = 0
    tax_minor: int = 0
    total_minor: int = 0
    amount_paid_minor: int = 0
    balance_due_minor: int = 0
    tax_breakdown: List[TaxBreakdownDTO] = Field(default_factory=list)

    lines: List[InvoiceLineDTO] = Field(default_factory=list)
    locked_job_item_ids: List[str] = Field(default_factory=list)

    client_name: str
    client_email: Optional[str] = None
    client_abn: Optional[str] = None
    client_shortcode: Optional[str] = None
    client_address: Optional[dict] = None

    public_token: str = Field(..., description="Token for the public invoice link")
    notes: Optional[str] = None
    payment_instructions: Optional[str] = None

    created_at: datetime
    updated_at: datetime
    created_by: Optional[str] = None
    issued_by: Optional[str] = None
    version: int = Field(..., description="Optimistic concurrency version")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "3b0f6c1d2e4a4b5c9d8e7f6a5b4c3d2e",
                "tenant_id": "tenant_xyz789",
                "status": "sent",
                "invoice_number": "2025-001",
                "subtotal_minor": 20000,
                "tax_minor": 2000,
                "total_minor": 22000,
                "amount_paid_minor": 0,
                "balance_due_minor": 22000,
                "tax_breakdown": [
                    {"rate": "0.1", "taxable_amount_minor": 20000, "tax_minor": 2000}
                ],
            }
        }

    @classmethod
    def from_entity(cls, invoice: Invoice, lines: Sequence[InvoiceLine]) -> "InvoiceResponseDTO":
        ordered = sorted(lines, key=lambda line: line.position)
        return cls(
            id=invoice.id,
            tenant_id=invoice.tenant_id,
            client_id=invoice.client_id,
            status=invoice.status,
            invoice_number=invoice.invoice_number,
            invoice_display_number=invoice.invoice_display_number,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            viewed_at=invoice.viewed_at,
            subtotal_minor=invoice.subtotal_minor,
            tax_minor=invoice.tax_minor,
            total_minor=invoice.total_minor,
            amount_paid_minor=invoice.amount_paid_minor,
            balance_due_minor=invoice.balance_due_minor,
            tax_breakdown=[TaxBreakdownDTO.from_entry(entry) for entry in invoice.breakdown()],
            lines=[InvoiceLineDTO.from_entity(line) for line in ordered],
            locked_job_item_ids=[line.job_item_id for line in ordered],
            client_name=invoice.client_name,
            client_email=invoice.client_email,
            client_abn=invoice.client_abn,
            client_shortcode=invoice.client_shortcode,
            client_address=invoice.client_address,
            public_token=invoice.public_token,
            notes=invoice.notes,
            payment_instructions=invoice.payment_instructions,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
            created_by=invoice.created_by,
            issued_by=invoice.issued_by,
            version=invoice.version,
        )


class InvoiceSummaryDTO(BaseModel):
    """Invoice row for list views (no lines)"""

    id: str
    status: InvoiceStatus
    invoice_number: Optional[str] = None
    invoice_display_number: Optional[str] = None
    client_id: str
    client_name: str
    issue_date: Optional[datetime] = None
    due_date: Optional[date] = None
    total_minor: int
    amount_paid_minor: int
    balance_due_minor: int
    created_at: datetime

    @classmethod
    def from_entity(cls, invoice: Invoice) -> "InvoiceSummaryDTO":
        return cls(
            id=invoice.id,
            status=invoice.status,
            invoice_number=invoice.invoice_number,
            invoice_display_number=invoice.invoice_display_number,
            client_id=invoice.client_id,
            client_name=invoice.client_name,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            total_minor=invoice.total_minor,
            amount_paid_minor=invoice.amount_paid_minor,
            balance_due_minor=invoice.balance_due_minor,
            created_at=invoice.created_at,
        )


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceSummaryDTO] = Field(..., description="Invoices, newest first")
    total: int = Field(..., description="Total matching invoices")
    limit: int
    offset: int


class DeleteInvoiceResponseDTO(BaseModel):
    invoice_id: str = Field(..., description="Deleted invoice ID")
    released_job_item_ids: List[str] = Field(
        default_factory=list,
        description="Job items returned to open"
    )


class VoidInvoiceResponseDTO(BaseModel):
    invoice: InvoiceResponseDTO
    previous_status: InvoiceStatus = Field(..., description="Status before voiding")
    released_job_item_ids: List[str] = Field(
        default_factory=list,
        description="Job items returned to open (only when a draft is voided)"
    )


class MarkViewedResponseDTO(BaseModel):
    invoice_id: str
    status: InvoiceStatus
    viewed_at: Optional[datetime] = None
    changed: bool = Field(..., description="True when this call moved the invoice to viewed")


class PublicInvoiceLineDTO(BaseModel):
    title: str
    description: Optional[str] = None
    job_title: str
    quantity: Decimal
    unit_label: str
    unit_price: str
    tax_rate: str
    total: str


class PublicInvoiceDTO(BaseModel):
    """
    Read-only invoice view for the public link

    Carries display-formatted amounts and the issuing business details.
    Internal identifiers other than the invoice number are omitted.
    """

    invoice_number: Optional[str] = None
    invoice_display_number: Optional[str] = None
    status: InvoiceStatus
    issue_date: Optional[datetime] = None
    due_date: Optional[date] = None
    currency: str

    business_name: Optional[str] = None
    business_abn: Optional[str] = None
    business_address: Optional[str] = None
    business_email: Optional[str] = None
    business_phone: Optional[str] = None
    tax_label: str

    client_name: str
    client_email: Optional[str] = None
    client_abn: Optional[str] = None
    client_address: Optional[dict] = None

    lines: List[PublicInvoiceLineDTO] = Field(default_factory=list)
    subtotal: str
    tax: str
    total: str
    amount_paid: str
    balance_due: str
    tax_breakdown: List[dict] = Field(default_factory=list)

    notes: Optional[str] = None
    payment_instructions: Optional[str] = None
    invoice_terms: Optional[str] = None
    invoice_footer: Optional[str] = None
    bank_account_name: Optional[str] = None
    bank_bsb: Optional[str] = None
    bank_account_number: Optional[str] = None

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        lines: Sequence[InvoiceLine],
        settings: Optional[TenantSettings],
        currency: str,
    ) -> "PublicInvoiceDTO":
        def money(minor: int) -> str:
            return format_minor_units(minor, currency)

        return cls(
            invoice_number=invoice.invoice_number,
            invoice_display_number=invoice.invoice_display_number,
            status=invoice.status,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            currency=currency,
            business_name=settings.business_name if settings else None,
            business_abn=settings.abn if settings else None,
            business_address=settings.address if settings else None,
            business_email=settings.email if settings else None,
            business_phone=settings.phone if settings else None,
            tax_label=settings.tax_label if settings else "Tax",
            client_name=invoice.client_name,
            client_email=invoice.client_email,
            client_abn=invoice.client_abn,
            client_address=invoice.client_address,
            lines=[
                PublicInvoiceLineDTO(
                    title=line.title,
                    description=line.description,
                    job_title=line.job_title,
                    quantity=line.quantity,
                    unit_label=billable_unit_label(BillableUnit(line.unit), line.quantity),
                    unit_price=money(line.unit_price_minor),
                    tax_rate=format_tax_rate(line.tax_rate),
                    total=money(line.total_minor),
                )
                for line in sorted(lines, key=lambda line: line.position)
            ],
            subtotal=money(invoice.subtotal_minor),
            tax=money(invoice.tax_minor),
            total=money(invoice.total_minor),
            amount_paid=money(invoice.amount_paid_minor),
            balance_due=money(invoice.balance_due_minor),
            tax_breakdown=[
                {
                    "rate": format_tax_rate(entry.rate),
                    "taxable_amount": money(entry.taxable_amount_minor),
                    "tax": money(entry.tax_minor),
                }
                for entry in invoice.breakdown()
            ],
            notes=invoice.notes,
            payment_instructions=invoice.payment_instructions,
            invoice_terms=settings.invoice_terms if settings else None,
            invoice_footer=settings.invoice_footer if settings else None,
            bank_account_name=settings.bank_account_name if settings else None,
            bank_bsb=settings.bank_bsb if settings else None,
            bank_account_number=settings.bank_account_number if settings else None,
        )


class MarkOverdueCommandDTO(BaseModel):
    tenant_id: str = Field(..., description="Tenant identifier")
    invoice_id: str = Field(..., description="Invoice ID")


class OverdueSweepResultDTO(BaseModel):
    """
    Result DTO for one overdue sweep run

    Returned by OverdueSweepWorker.run_once().
    """

    scanned: int = Field(..., description="Candidate invoices examined")
    marked_overdue: int = Field(..., description="Invoices moved to overdue")
    failed: int = Field(..., description="Invoices whose update failed")
    as_of: date = Field(..., description="Date the sweep compared due dates against")
    execution_time_ms: int = Field(..., description="Execution time in milliseconds")
