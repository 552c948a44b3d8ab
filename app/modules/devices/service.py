"""Domain service orchestrating device related workflows."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, TypeVar

from .exceptions import (
    DeviceDeadlineExceededError,
    DeviceError,
    DeviceInUseError,
    DeviceRepositoryError,
    DeviceValidationError,
)
from .models import UNSET, Device, DeviceCreateInput, DeviceState, DeviceUpdateInput
from .repository import DeviceRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


def generate_device_id() -> str:
    return str(uuid.uuid4())


def _require(value: object, message: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DeviceValidationError(message)


@dataclass(slots=True)
class DeviceService:
    """Single entry point for device use cases, independent of transport."""

    repository: DeviceRepository
    timeout: Optional[float] = None

    @classmethod
    def with_session(cls, session: "AsyncSession", timeout: Optional[float] = None) -> "DeviceService":
        # Imported here so the domain package never imports the ORM at load time.
        from app.infrastructure.database.repositories.device_repository import SqlDeviceRepository

        return cls(SqlDeviceRepository(session), timeout=timeout)

    async def create_device(self, payload: DeviceCreateInput) -> Device:
        _require(payload.name, "device name is required")
        _require(payload.brand, "device brand is required")
        state = DeviceState.parse(payload.state)

        device = Device.create(generate_device_id(), payload.name, payload.brand, state)
        await self._call(self.repository.create(device), "creating device")
        logger.info("Created device %s (%s / %s)", device.id, device.brand, device.name)
        return device

    async def get_device(self, device_id: str) -> Device:
        _require(device_id, "device ID cannot be empty")
        return await self._call(self.repository.get_by_id(device_id), "loading device")

    async def list_devices(self) -> list[Device]:
        return await self._call(self.repository.list_all(), "listing devices")

    async def list_devices_by_brand(self, brand: str) -> list[Device]:
        _require(brand, "brand cannot be empty")
        return await self._call(self.repository.list_by_brand(brand), "listing devices by brand")

    async def list_devices_by_state(self, state: DeviceState | str) -> list[Device]:
        parsed = DeviceState.parse(state)
        return await self._call(self.repository.list_by_state(parsed), "listing devices by state")

    async def update_device(self, device_id: str, payload: DeviceUpdateInput) -> Device:
        _require(device_id, "device ID cannot be empty")
        device = await self._call(self.repository.get_by_id(device_id), "loading device")

        # State first, so a request can release a device and rename it at once.
        if payload.state is not UNSET:
            device.set_state(payload.state)

        if payload.name is not UNSET or payload.brand is not UNSET:
            name = payload.name if payload.name is not UNSET else device.name
            brand = payload.brand if payload.brand is not UNSET else device.brand
            device.set_name_and_brand(name, brand)

        await self._call(self.repository.update(device), "updating device")
        logger.info("Updated device %s (state=%s)", device.id, device.state.value)
        return device

    async def delete_device(self, device_id: str) -> None:
        _require(device_id, "device ID cannot be empty")
        device = await self._call(self.repository.get_by_id(device_id), "loading device")
        if not device.can_delete():
            raise DeviceInUseError("cannot delete device in use")

        await self._call(self.repository.delete(device_id), "deleting device")
        logger.info("Deleted device %s", device_id)

    async def _call(self, operation: Awaitable[T], action: str) -> T:
        """Await a repository call and classify whatever it raises."""
        try:
            async with asyncio.timeout(self.timeout):
                return await operation
        except DeviceError:
            raise
        except TimeoutError as exc:
            logger.warning("Timed out after %ss while %s", self.timeout, action)
            raise DeviceDeadlineExceededError(f"timed out while {action}") from exc
        except Exception as exc:
            logger.exception("Storage failure while %s", action)
            raise DeviceRepositoryError(f"failed {action}") from exc
