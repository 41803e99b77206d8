from .client_repository import ClientRepository
from .job_repository import JobRepository
from .tenant_settings_repository import TenantSettingsRepository
from .job_item_repository import JobItemRepository
from .invoice_repository import InvoiceRepository
from .invoice_line_repository import InvoiceLineRepository
from .invoice_counter_repository import InvoiceCounterRepository

__all__ = [
    "ClientRepository",
    "JobRepository",
    "TenantSettingsRepository",
    "JobItemRepository",
    "InvoiceRepository",
    "InvoiceLineRepository",
    "InvoiceCounterRepository",
]
