"""LoadWorkspace Use Case

Builds the session workspace from the stored snapshot.
"""

import logging
from libs.result import Result, Return
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.app.services.unit_of_work import UnitOfWork
from invoicebook.app.workspace import Workspace
from invoicebook.domain.snapshot import Snapshot
from .persistence import persist_snapshot

logger = logging.getLogger(__name__)


class LoadWorkspace:
    """
    Use Case: Load the workspace at startup

    Business Rules:
    1. A stored snapshot is loaded with every readable record; unreadable
       fields and settings fall back to defaults one by one
    2. No stored snapshot: default settings and empty collections, saved at once
    3. Unreadable snapshot: warning, defaults in memory, and the stored payload
       is copied to a backup key before any later save can replace it

    Never fails; every path ends with a usable workspace.
    """

    def __init__(self, uow: UnitOfWork, snapshot_repo: SnapshotRepository):
        self.uow = uow
        self.snapshot_repo = snapshot_repo

    async def execute(self) -> Result[Workspace]:
        try:
            snapshot = await self.snapshot_repo.load()
        except Exception as e:
            logger.warning(f"Error loading saved data, starting from defaults: {e}")
            await self._set_aside_unreadable()
            return Return.ok(Workspace(Snapshot.default()))

        if snapshot is None:
            logger.info("No saved data found, using defaults")
            snapshot = Snapshot.default()
            await persist_snapshot(self.uow, self.snapshot_repo, snapshot)
            return Return.ok(Workspace(snapshot))

        logger.info(
            f"Data loaded: {len(snapshot.invoices)} invoices, {len(snapshot.clients)} clients"
        )
        return Return.ok(Workspace(snapshot))

    async def _set_aside_unreadable(self) -> None:
        try:
            async with self.uow:
                backup_key = await self.snapshot_repo.set_aside()
                await self.uow.commit()
        except Exception as e:
            logger.error(f"Could not back up unreadable data: {e}")
            return

        if backup_key:
            logger.warning(f"Unreadable data kept under '{backup_key}'")
