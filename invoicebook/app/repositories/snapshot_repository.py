"""Snapshot Repository Interface

Defines the contract for persisting the full data snapshot.
"""

from abc import ABC, abstractmethod
from typing import Optional
from invoicebook.domain.snapshot import Snapshot


class SnapshotRepository(ABC):
    """
    Repository interface for the snapshot store

    The store holds exactly one snapshot. Saving overwrites it as a whole;
    there is no partial update.
    """

    @abstractmethod
    async def load(self) -> Optional[Snapshot]:
        """
        Load the stored snapshot

        Returns:
            Snapshot if one was saved before, None otherwise

        Raises:
            ValueError: stored payload is malformed
        """
        pass

    @abstractmethod
    async def save(self, snapshot: Snapshot) -> None:
        """
        Overwrite the stored snapshot

        Args:
            snapshot: Complete data set to persist
        """
        pass

    @abstractmethod
    async def set_aside(self) -> Optional[str]:
        """
        Keep a copy of the stored payload under a backup key

        Used before an unreadable payload can be overwritten by a later save.

        Returns:
            Backup key, or None if nothing is stored
        """
        pass
