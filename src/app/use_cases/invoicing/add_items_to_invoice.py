"""AddItemsToInvoice Use Case

Snapshots open job items onto a draft invoice and locks them to it.
"""

from datetime import datetime
from decimal import Decimal
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.job_item_repository import JobItemRepository
from src.app.repositories.job_repository import JobRepository
from src.app.repositories.tenant_settings_repository import TenantSettingsRepository
from src.domain.errors import NotFoundError, ValidationFailedError
from src.domain.invoice_line import InvoiceLine
from .dtos import AddItemsCommandDTO, InvoiceResponseDTO

UNKNOWN_JOB_TITLE = "Unknown Job"


class AddItemsToInvoice:
    """
    Use Case: Add job items to a draft invoice

    Business Rules:
    1. The invoice must exist and be a draft
    2. Every item must exist, be open and unlocked; one bad item fails the batch
    3. Each line snapshots the item with the tenant's default tax rate
       (0 when the item is not tax applicable)
    4. Lines are appended in request order
    5. Totals, breakdown and balance due are recomputed from all lines
    6. Each item is locked to this invoice

    Flow:
    1. Validate request (non-empty, no duplicates)
    2. Get invoice with lock (SELECT FOR UPDATE)
    3. Get items with lock and take the lock on each
    4. Resolve job titles and tax rate, build line snapshots
    5. Persist items and lines, recompute invoice totals
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_repo: InvoiceLineRepository,
        job_item_repo: JobItemRepository,
        job_repo: JobRepository,
        settings_repo: TenantSettingsRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.job_item_repo = job_item_repo
        self.job_repo = job_repo
        self.settings_repo = settings_repo

    async def execute(self, command: AddItemsCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute add items

        Args:
            command: AddItemsCommandDTO with tenant_id, invoice_id, job_item_ids

        Returns:
            Result[InvoiceResponseDTO]: Updated invoice or error
        """

        async def body() -> InvoiceResponseDTO:
            # Step 1: Validate request
            if not command.job_item_ids:
                raise ValidationFailedError("NO_ITEMS_SELECTED", "At least one job item is required")
            if len(set(command.job_item_ids)) != len(command.job_item_ids):
                raise ValidationFailedError(
                    "DUPLICATE_JOB_ITEMS", "The same job item was selected more than once"
                )

            # Step 2: Get invoice with pessimistic lock
            invoice = await self.invoice_repo.get_by_id(
                command.tenant_id, command.invoice_id, for_update=True
            )
            if invoice is None:
                raise NotFoundError("INVOICE_NOT_FOUND", "Invoice not found")
            invoice.ensure_draft("Can only add items to draft invoices")

            # Step 3: Get items with lock and claim each one, in request order
            found = await self.job_item_repo.get_by_ids(
                command.tenant_id, command.job_item_ids, for_update=True
            )
            by_id = {item.id: item for item in found}
            for job_item_id in command.job_item_ids:
                if job_item_id not in by_id:
                    raise NotFoundError("JOB_ITEM_NOT_FOUND", f"Job item {job_item_id} not found")
            items = [by_id[job_item_id] for job_item_id in command.job_item_ids]

            locked_at = datetime.utcnow()
            for item in items:
                item.select_for(invoice.id, locked_at)

            # Step 4: Build line snapshots
            settings = await self.settings_repo.get(command.tenant_id)
            tax_rate = settings.effective_tax_rate if settings else Decimal("0")

            jobs = await self.job_repo.get_by_ids(
                command.tenant_id, list(dict.fromkeys(item.job_id for item in items))
            )
            job_titles = {job.id: job.title for job in jobs}

            existing_lines = await self.line_repo.get_by_invoice_id(invoice.id)
            next_position = max((line.position for line in existing_lines), default=-1) + 1

            new_lines = [
                InvoiceLine.snapshot(
                    invoice_id=invoice.id,
                    position=next_position + offset,
                    item=item,
                    job_title=job_titles.get(item.job_id, UNKNOWN_JOB_TITLE),
                    tax_rate=tax_rate,
                )
                for offset, item in enumerate(items)
            ]

            # Step 5: Persist items, lines and recomputed totals
            for item in items:
                await self.job_item_repo.update(item)
            await self.line_repo.create_many(new_lines)

            lines = existing_lines + new_lines
            invoice.apply_lines(lines)
            updated = await self.invoice_repo.update(invoice)

            return InvoiceResponseDTO.from_entity(updated, lines)

        return await run_in_transaction(
            self.uow,
            body,
            operation="ADD_ITEMS",
            context={"tenant_id": command.tenant_id, "invoice_id": command.invoice_id},
        )
