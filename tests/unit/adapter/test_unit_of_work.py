"""Unit tests for SqlAlchemyUnitOfWork"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from invoicebook.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.mark.asyncio
class TestSqlAlchemyUnitOfWork:

    async def test_committed_block_is_not_rolled_back(self, mock_session):
        uow = SqlAlchemyUnitOfWork(mock_session)

        async with uow:
            await uow.commit()

        mock_session.commit.assert_awaited_once()
        mock_session.rollback.assert_not_called()

    async def test_error_in_block_rolls_back_and_propagates(self, mock_session):
        uow = SqlAlchemyUnitOfWork(mock_session)

        with pytest.raises(RuntimeError):
            async with uow:
                raise RuntimeError("write failed")

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_called()
