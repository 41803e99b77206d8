"""Unit tests for CreateDraftInvoice use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.create_draft_invoice import CreateDraftInvoice
from src.app.use_cases.invoicing.dtos import CreateDraftInvoiceCommandDTO
from src.domain.invoice import InvoiceStatus
from tests.factories import TENANT_ID, USER_ID, make_client


@pytest.fixture
def mock_client_repo():
    return MagicMock()


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda invoice: invoice)
    return repo


@pytest.fixture
def create_use_case(mock_uow, mock_client_repo, mock_invoice_repo):
    return CreateDraftInvoice(
        uow=mock_uow,
        client_repo=mock_client_repo,
        invoice_repo=mock_invoice_repo,
    )


@pytest.mark.asyncio
class TestCreateDraftInvoice:
    async def test_creates_empty_draft_with_client_snapshot(
        self, create_use_case, mock_client_repo, mock_invoice_repo, mock_uow
    ):
        """
        Given: Client exists in the tenant
        When: A draft is created for it
        Then: Draft has zero totals, no lines and the client's billing details
        """
        # Arrange
        client = make_client()
        mock_client_repo.get_by_id = AsyncMock(return_value=client)
        command = CreateDraftInvoiceCommandDTO(
            tenant_id=TENANT_ID, user_id=USER_ID, client_id=client.id, notes="Thanks"
        )

        # Act
        result = await create_use_case.execute(command)

        # Assert
        assert result.is_ok()
        draft = result.value
        assert draft.status == InvoiceStatus.DRAFT
        assert draft.total_minor == 0
        assert draft.lines == []
        assert draft.invoice_number is None
        assert draft.client_name == client.name
        assert draft.client_shortcode == "QNTS"
        assert draft.client_address["city"] == "Sydney"
        assert draft.created_by == USER_ID
        assert draft.notes == "Thanks"
        assert len(draft.public_token) == 64
        mock_client_repo.get_by_id.assert_called_once_with(TENANT_ID, client.id)
        mock_uow.commit.assert_called_once()

    async def test_missing_client(self, create_use_case, mock_client_repo, mock_invoice_repo, mock_uow):
        mock_client_repo.get_by_id = AsyncMock(return_value=None)
        command = CreateDraftInvoiceCommandDTO(tenant_id=TENANT_ID, user_id=USER_ID, client_id="nope")

        result = await create_use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "CLIENT_NOT_FOUND"
        assert result.error.reason == "not_found"
        mock_invoice_repo.create.assert_not_called()
        mock_uow.rollback.assert_called_once()
