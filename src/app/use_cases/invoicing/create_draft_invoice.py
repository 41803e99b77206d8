"""CreateDraftInvoice Use Case

Opens an empty draft invoice for a client.
"""

from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.transaction import run_in_transaction
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.errors import NotFoundError
from src.domain.invoice import Invoice, InvoiceStatus
from .dtos import CreateDraftInvoiceCommandDTO, InvoiceResponseDTO


class CreateDraftInvoice:
    """
    Use Case: Create a draft invoice

    Business Rules:
    1. The client must exist in the caller's tenant
    2. Client billing details are snapshotted onto the invoice
    3. The draft starts with no lines, zero totals and a fresh public token

    Flow:
    1. Load client
    2. Build invoice with client snapshot
    3. Persist and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo

    async def execute(self, command: CreateDraftInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute draft creation

        Args:
            command: CreateDraftInvoiceCommandDTO with tenant_id, user_id, client_id

        Returns:
            Result[InvoiceResponseDTO]: The new draft or error (CLIENT_NOT_FOUND)
        """

        async def body() -> InvoiceResponseDTO:
            # Step 1: Load client
            client = await self.client_repo.get_by_id(command.tenant_id, command.client_id)
            if client is None:
                raise NotFoundError("CLIENT_NOT_FOUND", "Client not found")

            # Step 2: Build draft with client snapshot
            invoice = Invoice(
                tenant_id=command.tenant_id,
                client_id=client.id,
                status=InvoiceStatus.DRAFT,
                due_date=command.due_date,
                client_name=client.name,
                client_email=client.email,
                client_abn=client.abn,
                client_shortcode=client.shortcode,
                client_address=client.address(),
                notes=command.notes,
                payment_instructions=command.payment_instructions,
                created_by=command.user_id,
            )

            # Step 3: Persist
            created = await self.invoice_repo.create(invoice)
            return InvoiceResponseDTO.from_entity(created, [])

        return await run_in_transaction(
            self.uow,
            body,
            operation="CREATE_INVOICE",
            context={"tenant_id": command.tenant_id, "client_id": command.client_id},
        )
