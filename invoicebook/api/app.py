import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from invoicebook.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoicebook.api.error import ClientError, client_error_handler
from invoicebook.api.routes import clients, dashboard, invoices, settings
from invoicebook.app.use_cases.invoicing import LoadWorkspace
from invoicebook.depends import AsyncSessionLocal, build_snapshot_repository, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        use_case = LoadWorkspace(SqlAlchemyUnitOfWork(session), build_snapshot_repository(session))
        result = await use_case.execute()
    app.state.workspace = result.value
    logger.info("Workspace ready")

    yield

    await engine.dispose()


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Invoicebook API",
        description="Invoices, clients and dashboard for a single business",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClientError, client_error_handler)

    app.include_router(dashboard.router, prefix=config.API_PREFIX)
    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(clients.router, prefix=config.API_PREFIX)
    app.include_router(settings.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
