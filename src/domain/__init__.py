from .base import BaseModel, generate_uuid
from .caller import Caller, TenantRole
from .errors import (
    ErrorKind,
    InvoicingError,
    NotFoundError,
    PreconditionFailedError,
    ValidationFailedError,
    AuthorizationFailedError,
)
from .client import Client
from .job import Job, JobStatus
from .tenant_settings import TenantSettings, TaxType
from .job_item import JobItem, ItemStatus, ItemLock, BillableUnit
from .invoice_line import InvoiceLine
from .invoice import Invoice, InvoiceStatus
from .invoice_counter import InvoiceCounter, format_invoice_number

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Caller",
    "TenantRole",
    "ErrorKind",
    "InvoicingError",
    "NotFoundError",
    "PreconditionFailedError",
    "ValidationFailedError",
    "AuthorizationFailedError",
    "Client",
    "Job",
    "JobStatus",
    "TenantSettings",
    "TaxType",
    "JobItem",
    "ItemStatus",
    "ItemLock",
    "BillableUnit",
    "InvoiceLine",
    "Invoice",
    "InvoiceStatus",
    "InvoiceCounter",
    "format_invoice_number",
]
