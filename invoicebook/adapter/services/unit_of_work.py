import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from invoicebook.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Commits or rolls back the snapshot writes flushed to one session

    Used as ``async with uow:``; leaving the block on an exception rolls back
    whatever was not committed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.debug(f"Rolling back after {exc_type.__name__}")
            await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
