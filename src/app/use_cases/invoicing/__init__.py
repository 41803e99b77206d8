"""Invoicing use cases"""
from .create_draft_invoice import CreateDraftInvoice
from .add_items_to_invoice import AddItemsToInvoice
from .remove_item_from_invoice import RemoveItemFromInvoice
from .issue_invoice import IssueInvoice
from .update_invoice_payment import UpdateInvoicePayment
from .void_invoice import VoidInvoice
from .delete_draft_invoice import DeleteDraftInvoice
from .mark_invoice_viewed import MarkInvoiceViewed
from .get_public_invoice import GetPublicInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .mark_invoice_overdue import MarkInvoiceOverdue
from .dtos import (
    CreateDraftInvoiceCommandDTO,
    AddItemsCommandDTO,
    RemoveItemCommandDTO,
    IssueInvoiceCommandDTO,
    UpdatePaymentCommandDTO,
    VoidInvoiceCommandDTO,
    DeleteDraftInvoiceCommandDTO,
    ListInvoicesQueryDTO,
    MarkOverdueCommandDTO,
    TaxBreakdownDTO,
    InvoiceLineDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    ListInvoicesResponseDTO,
    DeleteInvoiceResponseDTO,
    VoidInvoiceResponseDTO,
    MarkViewedResponseDTO,
    PublicInvoiceDTO,
    OverdueSweepResultDTO,
)

__all__ = [
    "CreateDraftInvoice",
    "AddItemsToInvoice",
    "RemoveItemFromInvoice",
    "IssueInvoice",
    "UpdateInvoicePayment",
    "VoidInvoice",
    "DeleteDraftInvoice",
    "MarkInvoiceViewed",
    "GetPublicInvoice",
    "GetInvoice",
    "ListInvoices",
    "MarkInvoiceOverdue",
    "CreateDraftInvoiceCommandDTO",
    "AddItemsCommandDTO",
    "RemoveItemCommandDTO",
    "IssueInvoiceCommandDTO",
    "UpdatePaymentCommandDTO",
    "VoidInvoiceCommandDTO",
    "DeleteDraftInvoiceCommandDTO",
    "ListInvoicesQueryDTO",
    "MarkOverdueCommandDTO",
    "TaxBreakdownDTO",
    "InvoiceLineDTO",
    "InvoiceResponseDTO",
    "InvoiceSummaryDTO",
    "ListInvoicesResponseDTO",
    "DeleteInvoiceResponseDTO",
    "VoidInvoiceResponseDTO",
    "MarkViewedResponseDTO",
    "PublicInvoiceDTO",
    "OverdueSweepResultDTO",
]
