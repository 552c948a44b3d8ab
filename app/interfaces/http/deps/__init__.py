"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .devices import get_device_repository, get_device_service

__all__ = [
    "get_db_session",
    "get_device_repository",
    "get_device_service",
]
