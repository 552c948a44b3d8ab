"""Device related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.infrastructure.database.repositories.device_repository import SqlDeviceRepository
from app.modules.devices import DeviceRepository, DeviceService

from .database import get_db_session


def get_device_repository(db: AsyncSession = Depends(get_db_session)) -> DeviceRepository:
    return SqlDeviceRepository(db)


def get_device_service(
    repository: DeviceRepository = Depends(get_device_repository),
    settings: Settings = Depends(get_settings),
) -> DeviceService:
    return DeviceService(repository, timeout=settings.operation_timeout)


__all__ = [
    "get_device_repository",
    "get_device_service",
]
