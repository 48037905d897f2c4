from .snapshot_repository import SqlAlchemySnapshotRepository, SnapshotRecord

__all__ = [
    "SqlAlchemySnapshotRepository",
    "SnapshotRecord",
]
