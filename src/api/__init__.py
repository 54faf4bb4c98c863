"""API module exports."""

from src.api.clients import router as clients_router
from src.api.deps import get_catalog, get_client_service, get_db
from src.api.errors import register_exception_handlers
from src.api.health import router as health_router
from src.api.plans import router as plans_router

__all__ = [
    "clients_router",
    "get_catalog",
    "get_client_service",
    "get_db",
    "health_router",
    "plans_router",
    "register_exception_handlers",
]
