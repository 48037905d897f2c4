from .snapshot_repository import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
