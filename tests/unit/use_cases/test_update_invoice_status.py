"""Unit tests for UpdateInvoiceStatus use case"""

import pytest
from decimal import Decimal

from invoicebook.app.use_cases.invoicing.dtos import UpdateInvoiceStatusCommandDTO
from invoicebook.app.use_cases.invoicing.update_invoice_status import UpdateInvoiceStatus
from invoicebook.app.workspace import Workspace
from invoicebook.domain.invoice import Invoice, InvoiceStatus


@pytest.fixture
def workspace():
    workspace = Workspace()
    workspace.snapshot.invoices.append(
        Invoice(id="i1", number="INV-0001", client_id="c1", total="1180", status=InvoiceStatus.SENT)
    )
    return workspace


@pytest.fixture
def update_status_use_case(workspace, mock_uow, mock_snapshot_repo):
    return UpdateInvoiceStatus(workspace=workspace, uow=mock_uow, snapshot_repo=mock_snapshot_repo)


@pytest.mark.asyncio
class TestUpdateInvoiceStatus:

    async def test_mark_paid(self, update_status_use_case, workspace, mock_snapshot_repo):
        # Act
        result = await update_status_use_case.execute(
            UpdateInvoiceStatusCommandDTO(invoice_id="i1", status=InvoiceStatus.PAID)
        )

        # Assert
        assert result.is_ok()
        assert result.value.status == "paid"
        assert result.value.total == Decimal("1180.00")
        assert result.value.client_name == "Unknown Client"
        assert workspace.find_invoice("i1").status == InvoiceStatus.PAID
        mock_snapshot_repo.save.assert_awaited_once()

    async def test_same_status_is_noop(self, update_status_use_case, mock_snapshot_repo):
        result = await update_status_use_case.execute(
            UpdateInvoiceStatusCommandDTO(invoice_id="i1", status=InvoiceStatus.SENT)
        )

        assert result.is_ok()
        mock_snapshot_repo.save.assert_not_called()

    async def test_paid_is_final(self, update_status_use_case, workspace):
        workspace.find_invoice("i1").status = InvoiceStatus.PAID

        result = await update_status_use_case.execute(
            UpdateInvoiceStatusCommandDTO(invoice_id="i1", status=InvoiceStatus.SENT)
        )

        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert workspace.find_invoice("i1").status == InvoiceStatus.PAID

    async def test_invoice_not_found(self, update_status_use_case):
        result = await update_status_use_case.execute(
            UpdateInvoiceStatusCommandDTO(invoice_id="missing", status=InvoiceStatus.PAID)
        )

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
