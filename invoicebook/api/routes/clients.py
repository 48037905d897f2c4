"""Client API Routes"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from invoicebook.api.error import ClientError
from invoicebook.api.schemas.client_request import CreateClientRequestSchema
from invoicebook.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicebook.app.use_cases.invoicing import (
    ClientResponseDTO,
    CreateClient,
    CreateClientCommandDTO,
)
from invoicebook.app.workspace import Workspace
from invoicebook.depends import build_snapshot_repository, get_session, get_workspace
from invoicebook.domain.client import Client

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=List[Client], response_model_by_alias=False)
async def list_clients(workspace: Workspace = Depends(get_workspace)):
    """List clients in the order they were added."""
    return workspace.clients


@router.post(
    "",
    response_model=ClientResponseDTO,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
)
async def create_client(
    request: CreateClientRequestSchema,
    workspace: Workspace = Depends(get_workspace),
    session: AsyncSession = Depends(get_session),
):
    """
    Add a client.

    **Request body:**
    - `name` (required): Client name
    - `email`, `phone`, `address`, `gst` (optional)
    """
    uow = SqlAlchemyUnitOfWork(session)
    snapshot_repo = build_snapshot_repository(session)

    command = CreateClientCommandDTO(
        name=request.name,
        email=request.email,
        phone=request.phone,
        address=request.address,
        gst=request.gst,
    )

    use_case = CreateClient(workspace, uow, snapshot_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
