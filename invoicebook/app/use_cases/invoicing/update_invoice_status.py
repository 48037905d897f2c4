"""UpdateInvoiceStatus Use Case

Moves an invoice through its lifecycle (e.g. marks it paid).
"""

from libs.result import Result, Return, Error
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.app.services.unit_of_work import UnitOfWork
from invoicebook.app.workspace import Workspace
from .dtos import UpdateInvoiceStatusCommandDTO, InvoiceResponseDTO
from .persistence import persist_snapshot


class UpdateInvoiceStatus:
    """
    Use Case: Change an invoice's status

    Business Rules:
    1. Invoice must exist (INVOICE_NOT_FOUND)
    2. Transition must be allowed: draft -> sent, sent -> pending/paid,
       pending -> sent/paid; paid is terminal (INVALID_STATUS_TRANSITION)
    3. Setting the current status again is accepted and changes nothing
    4. Amounts are never touched
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

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        invoice = self.workspace.find_invoice(command.invoice_id)
        if invoice is None:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {command.invoice_id} not found",
                    reason="Invoice does not exist",
                )
            )

        if not invoice.can_transition_to(command.status):
            return Return.err(
                Error(
                    code="INVALID_STATUS_TRANSITION",
                    message=f"Cannot move invoice {invoice.number} from "
                            f"{invoice.status.value} to {command.status.value}",
                    reason="Status transition not allowed",
                )
            )

        persisted = True
        if invoice.status != command.status:
            invoice.status = command.status
            persisted = await persist_snapshot(self.uow, self.snapshot_repo, self.workspace.snapshot)

        client = self.workspace.find_client(invoice.client_id)
        return Return.ok(InvoiceResponseDTO.from_invoice(invoice, client, persisted=persisted))
