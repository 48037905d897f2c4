"""Draft editing Use Cases

Start, edit and discard the single in-progress invoice. Nothing here is
persisted; a draft only reaches storage once it is committed.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from invoicebook.app.workspace import Workspace
from .dtos import DraftAdjustmentsCommandDTO, DraftResponseDTO, UpdateDraftItemCommandDTO

logger = logging.getLogger(__name__)


def _no_active_draft() -> Error:
    return Error(
        code="NO_ACTIVE_DRAFT",
        message="There is no invoice draft in progress",
        reason="Start a draft first",
    )


class _DraftUseCase:
    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def _response(self) -> DraftResponseDTO:
        return DraftResponseDTO.from_draft(
            self.workspace.draft,
            self.workspace.draft_metadata,
            self.workspace.preview_number(),
        )


class StartDraft(_DraftUseCase):
    """
    Use Case: Start a new draft

    Replaces any draft in progress. The new draft has one blank line item,
    the default tax rate, no discount, and is dated today.
    """

    async def execute(self, today: Optional[date] = None) -> Result[DraftResponseDTO]:
        self.workspace.begin_draft(today)
        return Return.ok(self._response())


class GetDraft(_DraftUseCase):
    async def execute(self) -> Result[DraftResponseDTO]:
        if self.workspace.draft is None:
            return Return.err(_no_active_draft())
        return Return.ok(self._response())


class AddDraftItem(_DraftUseCase):
    """Use Case: Append a blank line item (quantity 1, rate 0)"""

    async def execute(self) -> Result[DraftResponseDTO]:
        if self.workspace.draft is None:
            return Return.err(_no_active_draft())
        self.workspace.draft.add_item()
        return Return.ok(self._response())


class UpdateDraftItem(_DraftUseCase):
    """
    Use Case: Edit one field of a line item

    Business Rules:
    1. Field must be description, quantity or rate (INVALID_LINE_ITEM_FIELD)
    2. Numeric input never fails; unparseable text counts as 0
    3. An unknown item id changes nothing and is not an error
    """

    async def execute(self, command: UpdateDraftItemCommandDTO) -> Result[DraftResponseDTO]:
        draft = self.workspace.draft
        if draft is None:
            return Return.err(_no_active_draft())

        try:
            draft.update_item(command.item_id, command.field, command.value)
        except ValueError as e:
            return Return.err(
                Error(
                    code="INVALID_LINE_ITEM_FIELD",
                    message=str(e),
                    reason="Only description, quantity and rate can be edited",
                )
            )

        return Return.ok(self._response())


class RemoveDraftItem(_DraftUseCase):
    """Use Case: Remove a line item; unknown ids are ignored"""

    async def execute(self, item_id: str) -> Result[DraftResponseDTO]:
        if self.workspace.draft is None:
            return Return.err(_no_active_draft())
        self.workspace.draft.remove_item(item_id)
        return Return.ok(self._response())


class ApplyDraftAdjustments(_DraftUseCase):
    """Use Case: Set the draft's tax rate and absolute discount"""

    async def execute(self, command: DraftAdjustmentsCommandDTO) -> Result[DraftResponseDTO]:
        draft = self.workspace.draft
        if draft is None:
            return Return.err(_no_active_draft())
        draft.recalculate(tax_rate=command.tax_rate, discount=command.discount)
        return Return.ok(self._response())


class DiscardDraft:
    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    async def execute(self) -> Result[None]:
        if self.workspace.draft is not None:
            logger.debug("Discarding invoice draft")
        self.workspace.discard_draft()
        return Return.ok()
