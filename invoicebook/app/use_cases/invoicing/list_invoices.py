"""ListInvoices and GetInvoice Use Cases"""

from typing import List, Optional
from libs.result import Result, Return, Error
from invoicebook.app.workspace import Workspace
from invoicebook.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO, InvoiceSummaryDTO


class ListInvoices:
    """
    Use Case: List invoices, newest first

    Optionally filtered by status and/or client.
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    async def execute(
        self,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[str] = None,
    ) -> Result[List[InvoiceSummaryDTO]]:
        currency = self.workspace.settings.invoice.currency
        rows = []
        for invoice in reversed(self.workspace.invoices):
            if status is not None and invoice.status != status:
                continue
            if client_id is not None and invoice.client_id != client_id:
                continue
            rows.append(
                InvoiceSummaryDTO.from_invoice(
                    invoice, self.workspace.find_client(invoice.client_id), currency
                )
            )
        return Return.ok(rows)


class GetInvoice:
    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    async def execute(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        invoice = self.workspace.find_invoice(invoice_id)
        if invoice is None:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                    reason="Invoice does not exist",
                )
            )
        client = self.workspace.find_client(invoice.client_id)
        return Return.ok(InvoiceResponseDTO.from_invoice(invoice, client))
