import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock unit of work; leaving the context on an error rolls back"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    async def _exit(exc_type, exc, tb):
        if exc_type is not None:
            await uow.rollback()
        # must not suppress the exception
        return False

    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(side_effect=_exit)
    return uow


@pytest.fixture
def mock_snapshot_repo():
    """Mock snapshot repository; nothing stored"""
    repo = MagicMock()
    repo.load = AsyncMock(return_value=None)
    repo.save = AsyncMock()
    repo.set_aside = AsyncMock(return_value="invoiceAppData.unreadable-1")
    return repo
