from .client_repository import SqlAlchemyClientRepository
from .job_repository import SqlAlchemyJobRepository
from .tenant_settings_repository import SqlAlchemyTenantSettingsRepository
from .job_item_repository import SqlAlchemyJobItemRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .invoice_counter_repository import SqlAlchemyInvoiceCounterRepository

__all__ = [
    "SqlAlchemyClientRepository",
    "SqlAlchemyJobRepository",
    "SqlAlchemyTenantSettingsRepository",
    "SqlAlchemyJobItemRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyInvoiceCounterRepository",
]
