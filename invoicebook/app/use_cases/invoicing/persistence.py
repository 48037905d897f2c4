"""Snapshot persistence shared by the mutating use cases"""

import logging
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.app.services.unit_of_work import UnitOfWork
from invoicebook.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)


async def persist_snapshot(
    uow: UnitOfWork,
    snapshot_repo: SnapshotRepository,
    snapshot: Snapshot,
) -> bool:
    """
    Save the whole snapshot and commit

    A failed save is reported, not raised: the in-memory state stays
    authoritative and the caller may retry with the next save.

    Returns:
        True if the snapshot is durable, False otherwise
    """
    try:
        async with uow:
            await snapshot_repo.save(snapshot)
            await uow.commit()
        return True
    except Exception as e:
        logger.warning(f"Failed to save snapshot, keeping in-memory state: {e}")
        return False
