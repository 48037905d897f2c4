"""SQLAlchemy Snapshot Repository Implementation

Stores the snapshot as one JSON document under a fixed key, using the
SQLAlchemy async session as a key-value store.
"""

import logging
import time
from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, String, Text
from sqlmodel.ext.asyncio.session import AsyncSession
from invoicebook.app.repositories.snapshot_repository import SnapshotRepository
from invoicebook.domain.base import utc_now
from invoicebook.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "invoiceAppData"


class SnapshotRecord(SQLModel, table=True):
    """
    Snapshot Record - One stored document per key

    Domain Rules:
    - payload is the complete snapshot JSON, overwritten on every save
    """

    __tablename__ = "snapshots"

    key: str = Field(
        sa_column=Column(String(100), primary_key=True),
        description="Storage key"
    )

    payload: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Snapshot JSON document"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last save timestamp (UTC)"
    )


class SqlAlchemySnapshotRepository(SnapshotRepository):
    """
    SQLAlchemy implementation of SnapshotRepository

    Uses async session for database operations. Writes are flushed here and
    committed by the unit of work.
    """

    def __init__(self, session: AsyncSession, key: str = DEFAULT_SNAPSHOT_KEY):
        self.session = session
        self.key = key

    async def load(self) -> Optional[Snapshot]:
        """
        Load the stored snapshot

        Returns:
            Snapshot if stored, None otherwise

        Raises:
            ValueError: stored payload is not a valid snapshot document
        """
        record = await self.session.get(SnapshotRecord, self.key)
        if record is None:
            return None
        return Snapshot.from_json(record.payload)

    async def save(self, snapshot: Snapshot) -> None:
        """
        Overwrite the stored snapshot

        Args:
            snapshot: Complete data set
        """
        payload = snapshot.to_json()
        record = await self.session.get(SnapshotRecord, self.key)

        if record is None:
            record = SnapshotRecord(key=self.key, payload=payload)
        else:
            record.payload = payload
            record.updated_at = utc_now()

        self.session.add(record)
        await self.session.flush()
        logger.debug(f"Snapshot '{self.key}' flushed ({len(payload)} bytes)")

    async def set_aside(self) -> Optional[str]:
        """
        Copy the stored payload to a backup key, as-is

        Returns:
            Backup key, or None if nothing is stored
        """
        record = await self.session.get(SnapshotRecord, self.key)
        if record is None:
            return None

        backup_key = f"{self.key}.unreadable-{int(time.time() * 1000)}"
        self.session.add(SnapshotRecord(key=backup_key, payload=record.payload))
        await self.session.flush()
        return backup_key
