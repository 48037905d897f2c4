"""FinalizeInvoice and SaveDraftInvoice Use Cases

Commit the active draft as an invoice. Finalizing validates the draft;
saving as draft does not.
"""

import logging
from libs.result import Result, Return, Error
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.app.services.unit_of_work import UnitOfWork
from invoicebook.app.workspace import Workspace
from invoicebook.domain.draft import InvoiceMetadata, finalize_invoice, save_draft
from invoicebook.domain.invoice import Invoice
from .dtos import CommitInvoiceCommandDTO, InvoiceResponseDTO
from .persistence import persist_snapshot

logger = logging.getLogger(__name__)


def _no_active_draft() -> Error:
    return Error(
        code="NO_ACTIVE_DRAFT",
        message="There is no invoice draft to commit",
        reason="Start a draft before finalizing or saving it",
    )


def _merge_metadata(workspace: Workspace, command: CommitInvoiceCommandDTO) -> InvoiceMetadata:
    base = workspace.draft_metadata or InvoiceMetadata()
    return InvoiceMetadata(
        issue_date=command.issue_date or base.issue_date,
        due_date=command.due_date or base.due_date,
        notes=command.notes if command.notes is not None else base.notes,
    )


class _CommitDraft:
    def __init__(
        self,
        workspace: Workspace,
        uow: UnitOfWork,
        snapshot_repo: SnapshotRepository,
    ):
        self.workspace = workspace
        self.uow = uow
        self.snapshot_repo = snapshot_repo

    async def _commit(self, invoice: Invoice) -> InvoiceResponseDTO:
        self.workspace.commit(invoice)
        persisted = await persist_snapshot(self.uow, self.snapshot_repo, self.workspace.snapshot)
        client = self.workspace.find_client(invoice.client_id)
        return InvoiceResponseDTO.from_invoice(invoice, client, persisted=persisted)


class FinalizeInvoice(_CommitDraft):
    """
    Use Case: Finalize the active draft

    Business Rules:
    1. A client must be selected (MISSING_CLIENT)
    2. At least one item needs a description and an amount > 0 (NO_VALID_LINE_ITEMS);
       other items are dropped from the invoice
    3. Invoice gets the next sequence number and status=sent
    4. On any error the draft and the sequence stay untouched

    Flow:
    1. Validate and build the invoice from the draft
    2. Append it, advance the sequence, clear the draft
    3. Save the snapshot
    4. Return response
    """

    async def execute(self, command: CommitInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        draft = self.workspace.draft
        if draft is None:
            return Return.err(_no_active_draft())

        result = finalize_invoice(
            draft,
            command.client_id,
            _merge_metadata(self.workspace, command),
            self.workspace.settings.invoice,
        )
        if result.is_err():
            logger.info(f"Finalize rejected: {result.error.code}")
            return result

        return Return.ok(await self._commit(result.value))


class SaveDraftInvoice(_CommitDraft):
    """
    Use Case: Save the active draft as a draft-status invoice

    Business Rules:
    1. No validation: an empty draft without a client is accepted
    2. Invoice gets the next sequence number and status=draft
    """

    async def execute(self, command: CommitInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        draft = self.workspace.draft
        if draft is None:
            return Return.err(_no_active_draft())

        invoice = save_draft(
            draft,
            command.client_id,
            _merge_metadata(self.workspace, command),
            self.workspace.settings.invoice,
        )
        return Return.ok(await self._commit(invoice))
