"""CreateClient Use Case"""

from libs.result import Result, Return
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.app.services.unit_of_work import UnitOfWork
from invoicebook.app.workspace import Workspace
from invoicebook.domain.base import generate_id, utc_now
from invoicebook.domain.client import Client
from .dtos import CreateClientCommandDTO, ClientResponseDTO
from .persistence import persist_snapshot


class CreateClient:
    """
    Use Case: Add a client

    Business Rules:
    1. Client id is creation-timestamp derived
    2. Clients are appended in creation order
    """

    def __init__(
        self,
        workspace: Workspace,
        uow: UnitOfWork,
        snapshot_repo: SnapshotRepository,
    ):
        self.workspace = workspace
        self.uow = uow
        self.snapshot_repo = snapshot_repo

    async def execute(self, command: CreateClientCommandDTO) -> Result[ClientResponseDTO]:
        client = Client(
            id=generate_id(),
            name=command.name,
            email=command.email,
            phone=command.phone,
            address=command.address,
            gst=command.gst,
            created_at=utc_now(),
        )
        self.workspace.add_client(client)

        persisted = await persist_snapshot(self.uow, self.snapshot_repo, self.workspace.snapshot)
        return Return.ok(ClientResponseDTO(client=client, persisted=persisted))
