"""FastAPI application entry point with lifespan management."""

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.clients import router as clients_router
from src.api.errors import register_exception_handlers
from src.api.health import router as health_router
from src.api.middleware import RequestContextMiddleware
from src.api.plans import router as plans_router
from src.core.config import settings
from src.core.database import create_engine, create_session_factory, init_schema
from src.core.logging import configure_logging, get_logger
from src.core.sentry import init_sentry
from src.plans.catalog import load_plan_catalog

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources.

    Startup:
        - Configure structured logging
        - Initialize Sentry error tracking
        - Load the plan catalog (fails fast if missing or empty)
        - Create database engine and session factory

    Shutdown:
        - Dispose database engine
    """
    configure_logging()
    logger.info("Starting application", environment=settings.environment)

    init_sentry()

    app.state.plan_catalog = load_plan_catalog(settings.plans_file)
    logger.info(
        "Plan catalog loaded",
        path=str(settings.plans_file),
        plans=sorted(app.state.plan_catalog),
    )

    app.state.db_engine = create_engine()
    app.state.async_session = create_session_factory(app.state.db_engine)
    if settings.create_schema:
        await init_schema(app.state.db_engine)
    logger.info("Database engine created")

    yield

    logger.info("Shutting down application")
    await app.state.db_engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="Client Registry",
    description="Clients, plans, used hours and payments",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)

app.add_middleware(RequestContextMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(clients_router)
app.include_router(plans_router)
