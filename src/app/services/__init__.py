from .unit_of_work import UnitOfWork
from .invoice_numbering import InvoiceNumberAllocator
from .transaction import run_in_transaction

__all__ = [
    "UnitOfWork",
    "InvoiceNumberAllocator",
    "run_in_transaction",
]
