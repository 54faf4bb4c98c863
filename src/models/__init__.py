"""SQLAlchemy models for the client registry."""

from src.models.base import Base
from src.models.client import Client

__all__ = [
    "Base",
    "Client",
]
