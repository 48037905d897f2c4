import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from invoicebook.adapter.repositories.snapshot_repository import SnapshotRecord  # noqa: F401
from invoicebook.app.workspace import Workspace
from invoicebook.depends import get_session


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite engine shared across sessions of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def workspace():
    return Workspace()


@pytest_asyncio.fixture
async def client(db_session, workspace):
    """Create test client with database session and workspace overrides"""
    from invoicebook.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)
    app.state.workspace = workspace

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
