"""Settings API Routes

Business settings and the JSON data export.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from invoicebook.api.error import ClientError
from invoicebook.api.schemas.settings_request import UpdateSettingsRequestSchema
from invoicebook.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicebook.app.use_cases.invoicing import (
    ExportData,
    InvoiceDefaultsDTO,
    SettingsResponseDTO,
    UpdateSettings,
    UpdateSettingsCommandDTO,
)
from invoicebook.app.workspace import Workspace
from invoicebook.depends import build_snapshot_repository, get_session, get_workspace
from invoicebook.domain.settings import BusinessProfile, PaymentDetails, Settings

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=Settings, response_model_by_alias=False)
async def get_settings(workspace: Workspace = Depends(get_workspace)):
    return workspace.settings


@router.put("", response_model=SettingsResponseDTO, response_model_by_alias=False)
async def update_settings(
    request: UpdateSettingsRequestSchema,
    workspace: Workspace = Depends(get_workspace),
    session: AsyncSession = Depends(get_session),
):
    """
    Update settings.

    Profile and payment sections are replaced whole; invoice defaults are
    merged field by field. The next invoice number cannot be set here.
    """
    uow = SqlAlchemyUnitOfWork(session)
    snapshot_repo = build_snapshot_repository(session)

    command = UpdateSettingsCommandDTO(
        profile=BusinessProfile(**request.profile.model_dump()) if request.profile else None,
        payment=PaymentDetails(**request.payment.model_dump()) if request.payment else None,
        invoice=InvoiceDefaultsDTO(**request.invoice.model_dump()) if request.invoice else None,
        dark_mode=request.dark_mode,
    )

    use_case = UpdateSettings(workspace, uow, snapshot_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/export",
    responses={
        200: {
            "content": {"application/json": {}},
            "description": "Full data export"
        }
    }
)
async def export_data(workspace: Workspace = Depends(get_workspace)):
    """Download every invoice, client and setting as invoice_data_<timestamp>.json."""
    result = await ExportData(workspace).execute()

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value.content,
        media_type="application/json",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.file_name}"
        }
    )
