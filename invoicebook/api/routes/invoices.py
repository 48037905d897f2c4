"""Invoice API Routes

FastAPI routes for the invoice draft, committed invoices and their documents.
"""

import base64
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from invoicebook.api.error import ClientError
from invoicebook.api.schemas.invoice_request import (
    CommitDraftRequestSchema,
    DraftAdjustmentsRequestSchema,
    UpdateDraftItemRequestSchema,
    UpdateStatusRequestSchema,
)
from invoicebook.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicebook.app.services.pdf_service import PdfService
from invoicebook.app.use_cases.invoicing import (
    AddDraftItem,
    ApplyDraftAdjustments,
    CommitInvoiceCommandDTO,
    DiscardDraft,
    DocumentResponseDTO,
    DraftAdjustmentsCommandDTO,
    DraftResponseDTO,
    FinalizeInvoice,
    GetDraft,
    GetInvoice,
    InvoicePdfResponseDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    ListInvoices,
    RemoveDraftItem,
    RenderInvoiceDocument,
    RenderInvoicePdf,
    SaveDraftInvoice,
    StartDraft,
    UpdateDraftItem,
    UpdateDraftItemCommandDTO,
    UpdateInvoiceStatus,
    UpdateInvoiceStatusCommandDTO,
)
from invoicebook.app.workspace import Workspace
from invoicebook.depends import build_snapshot_repository, get_pdf_service, get_session, get_workspace
from invoicebook.domain.invoice import InvoiceStatus
from libs.result import Result

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND_CODES = ("INVOICE_NOT_FOUND", "NO_ACTIVE_DRAFT")

_NO_DRAFT_RESPONSE = {
    404: {
        "description": "No draft in progress",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "NO_ACTIVE_DRAFT",
                        "message": "There is no invoice draft in progress"
                    }
                }
            }
        }
    }
}

_INVOICE_NOT_FOUND_RESPONSE = {
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice with ID 1735689600123 not found"
                    }
                }
            }
        }
    }
}


def _unwrap(result: Result):
    if result.is_err():
        if result.error.code in NOT_FOUND_CODES:
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error)
    return result.value


# Draft routes come first so "draft" is never read as an invoice id


@router.post(
    "/draft",
    response_model=DraftResponseDTO,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
)
async def start_draft(workspace: Workspace = Depends(get_workspace)):
    """
    Start a new invoice draft.

    Replaces any draft in progress. The draft starts with one blank line item,
    the default tax rate and the next invoice number as a preview.
    """
    return _unwrap(await StartDraft(workspace).execute())


@router.get(
    "/draft",
    response_model=DraftResponseDTO,
    response_model_by_alias=False,
    responses=_NO_DRAFT_RESPONSE,
)
async def get_draft(workspace: Workspace = Depends(get_workspace)):
    return _unwrap(await GetDraft(workspace).execute())


@router.delete("/draft", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(workspace: Workspace = Depends(get_workspace)):
    await DiscardDraft(workspace).execute()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/draft/items",
    response_model=DraftResponseDTO,
    response_model_by_alias=False,
    responses=_NO_DRAFT_RESPONSE,
)
async def add_draft_item(workspace: Workspace = Depends(get_workspace)):
    """Append a blank line item (quantity 1, rate 0) to the draft."""
    return _unwrap(await AddDraftItem(workspace).execute())


@router.patch(
    "/draft/items/{item_id}",
    response_model=DraftResponseDTO,
    response_model_by_alias=False,
    responses=_NO_DRAFT_RESPONSE,
)
async def update_draft_item(
    item_id: str,
    request: UpdateDraftItemRequestSchema,
    workspace: Workspace = Depends(get_workspace),
):
    """
    Edit one field of a draft line item.

    **Request body:**
    - `field` (required): description, quantity or rate
    - `value`: the value as typed; numbers that cannot be read count as 0

    The item amount and all draft totals are recalculated before returning.
    """
    command = UpdateDraftItemCommandDTO(item_id=item_id, field=request.field, value=request.value)
    return _unwrap(await UpdateDraftItem(workspace).execute(command))


@router.delete(
    "/draft/items/{item_id}",
    response_model=DraftResponseDTO,
    response_model_by_alias=False,
    responses=_NO_DRAFT_RESPONSE,
)
async def remove_draft_item(item_id: str, workspace: Workspace = Depends(get_workspace)):
    return _unwrap(await RemoveDraftItem(workspace).execute(item_id))


@router.put(
    "/draft/adjustments",
    response_model=DraftResponseDTO,
    response_model_by_alias=False,
    responses=_NO_DRAFT_RESPONSE,
)
async def apply_draft_adjustments(
    request: DraftAdjustmentsRequestSchema,
    workspace: Workspace = Depends(get_workspace),
):
    """Set the draft tax rate (percent) and absolute discount."""
    command = DraftAdjustmentsCommandDTO(tax_rate=request.tax_rate, discount=request.discount)
    return _unwrap(await ApplyDraftAdjustments(workspace).execute(command))


@router.post(
    "/draft/finalize",
    response_model=InvoiceResponseDTO,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Draft is not ready to be finalized",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NO_VALID_LINE_ITEMS",
                            "message": "Please add at least one line item"
                        }
                    }
                }
            }
        },
        **_NO_DRAFT_RESPONSE,
    }
)
async def finalize_draft(
    request: CommitDraftRequestSchema,
    workspace: Workspace = Depends(get_workspace),
    session: AsyncSession = Depends(get_session),
):
    """
    Finalize the draft as a sent invoice.

    **Request body:**
    - `client_id` (required): Client to bill
    - `issue_date`, `due_date`, `notes` (optional): override the draft defaults

    Line items without a description or amount are left out of the invoice.

    **Returns:**
    - 201: Invoice created (check `persisted` for the save outcome)
    - 400: MISSING_CLIENT or NO_VALID_LINE_ITEMS
    - 404: No draft in progress
    """
    uow = SqlAlchemyUnitOfWork(session)
    snapshot_repo = build_snapshot_repository(session)

    command = CommitInvoiceCommandDTO(
        client_id=request.client_id,
        issue_date=request.issue_date,
        due_date=request.due_date,
        notes=request.notes,
    )

    use_case = FinalizeInvoice(workspace, uow, snapshot_repo)
    return _unwrap(await use_case.execute(command))


@router.post(
    "/draft/save",
    response_model=InvoiceResponseDTO,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
    responses=_NO_DRAFT_RESPONSE,
)
async def save_draft(
    request: CommitDraftRequestSchema,
    workspace: Workspace = Depends(get_workspace),
    session: AsyncSession = Depends(get_session),
):
    """Save the draft as-is as a draft-status invoice. No validation."""
    uow = SqlAlchemyUnitOfWork(session)
    snapshot_repo = build_snapshot_repository(session)

    command = CommitInvoiceCommandDTO(
        client_id=request.client_id,
        issue_date=request.issue_date,
        due_date=request.due_date,
        notes=request.notes,
    )

    use_case = SaveDraftInvoice(workspace, uow, snapshot_repo)
    return _unwrap(await use_case.execute(command))


@router.get("", response_model=List[InvoiceSummaryDTO], response_model_by_alias=False)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    client_id: Optional[str] = Query(default=None),
    workspace: Workspace = Depends(get_workspace),
):
    """List invoices, newest first, optionally filtered by status or client."""
    return _unwrap(await ListInvoices(workspace).execute(status=status_filter, client_id=client_id))


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    response_model_by_alias=False,
    responses=_INVOICE_NOT_FOUND_RESPONSE,
)
async def get_invoice(invoice_id: str, workspace: Workspace = Depends(get_workspace)):
    return _unwrap(await GetInvoice(workspace).execute(invoice_id))


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    response_model_by_alias=False,
    responses={
        400: {
            "description": "Status change not allowed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATUS_TRANSITION",
                            "message": "Cannot move invoice INV-0001 from paid to sent"
                        }
                    }
                }
            }
        },
        **_INVOICE_NOT_FOUND_RESPONSE,
    }
)
async def update_invoice_status(
    invoice_id: str,
    request: UpdateStatusRequestSchema,
    workspace: Workspace = Depends(get_workspace),
    session: AsyncSession = Depends(get_session),
):
    """
    Move an invoice to another status (e.g. mark it paid).

    **Returns:**
    - 200: Status updated (same status is accepted and changes nothing)
    - 400: Transition not allowed (paid is final)
    - 404: Invoice not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    snapshot_repo = build_snapshot_repository(session)

    command = UpdateInvoiceStatusCommandDTO(invoice_id=invoice_id, status=request.status)
    use_case = UpdateInvoiceStatus(workspace, uow, snapshot_repo)
    return _unwrap(await use_case.execute(command))


@router.get(
    "/{invoice_id}/document",
    response_model=DocumentResponseDTO,
    response_model_by_alias=False,
    responses=_INVOICE_NOT_FOUND_RESPONSE,
)
async def get_invoice_document(
    invoice_id: str,
    compact: bool = Query(default=False, description="Compact layout instead of the full one"),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Project an invoice into its printable document model.

    The compact layout leaves the client GST number out of the recipient
    block and orders contact lines phone first.
    """
    return _unwrap(await RenderInvoiceDocument(workspace).execute(invoice_id, compact=compact))


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        **_INVOICE_NOT_FOUND_RESPONSE,
    }
)
async def download_invoice_pdf(
    invoice_id: str,
    compact: bool = Query(default=False),
    workspace: Workspace = Depends(get_workspace),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """
    Download an invoice as a PDF file named invoice_<timestamp>.pdf.

    **Returns:**
    - 200: PDF file as binary response
    - 400: PDF could not be rendered
    - 404: Invoice not found
    """
    result = await RenderInvoicePdf(workspace, pdf_service).execute(invoice_id, compact=compact)
    rendered: InvoicePdfResponseDTO = _unwrap(result)

    return Response(
        content=base64.b64decode(rendered.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={rendered.file_name}"
        }
    )
