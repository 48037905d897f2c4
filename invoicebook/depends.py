from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from invoicebook.adapter.repositories.snapshot_repository import SqlAlchemySnapshotRepository
from invoicebook.adapter.services.pdf_service import ReportLabPdfService
from invoicebook.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicebook.app.workspace import Workspace

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def build_snapshot_repository(session: AsyncSession) -> SqlAlchemySnapshotRepository:
    return SqlAlchemySnapshotRepository(session, key=ApplicationConfig.SNAPSHOT_KEY)


def get_workspace(request: Request) -> Workspace:
    """The workspace loaded at startup, shared by every request"""
    return request.app.state.workspace


def get_pdf_service() -> ReportLabPdfService:
    return ReportLabPdfService()
