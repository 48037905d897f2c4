"""RenderInvoiceDocument and RenderInvoicePdf Use Cases

Project a committed invoice into a document model, optionally rendered to PDF.
"""

import base64
import time
from invoicebook.domain.base import utc_now
from libs.result import Result, Return, Error
from invoicebook.app.services.pdf_service import PdfService
from invoicebook.app.workspace import Workspace
from invoicebook.domain.document import DocumentModel, project
from .dtos import DocumentResponseDTO, InvoicePdfResponseDTO


def pdf_file_name(timestamp_ms: int) -> str:
    return f"invoice_{timestamp_ms}.pdf"


class RenderInvoiceDocument:
    """
    Use Case: Project an invoice into a document model

    Business Rules:
    1. Invoice must exist (INVOICE_NOT_FOUND)
    2. A missing client is not an error; the recipient reads "Unknown Client"
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def _project(self, invoice_id: str, compact: bool) -> Result[DocumentModel]:
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
        return Return.ok(project(invoice, client, self.workspace.settings, compact=compact))

    async def execute(self, invoice_id: str, compact: bool = False) -> Result[DocumentResponseDTO]:
        result = self._project(invoice_id, compact)
        if result.is_err():
            return result
        return Return.ok(DocumentResponseDTO(invoice_id=invoice_id, document=result.value))


class RenderInvoicePdf(RenderInvoiceDocument):
    """
    Use Case: Render an invoice to PDF

    Flow:
    1. Project the invoice (same rules as RenderInvoiceDocument)
    2. Render the document with the PDF service
    3. Return the PDF base64 encoded with an invoice_<timestamp>.pdf name
    """

    def __init__(self, workspace: Workspace, pdf_service: PdfService):
        super().__init__(workspace)
        self.pdf_service = pdf_service

    async def execute(self, invoice_id: str, compact: bool = False) -> Result[InvoicePdfResponseDTO]:
        result = self._project(invoice_id, compact)
        if result.is_err():
            return result

        try:
            pdf_bytes = self.pdf_service.render_document(result.value)
        except Exception as e:
            return Return.err(
                Error(
                    code="RENDER_PDF_FAILED",
                    message="Error generating PDF. Please try again.",
                    reason=str(e),
                )
            )

        return Return.ok(
            InvoicePdfResponseDTO(
                invoice_id=invoice_id,
                number=result.value.header.number,
                file_name=pdf_file_name(int(time.time() * 1000)),
                pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                generated_at=utc_now(),
            )
        )
