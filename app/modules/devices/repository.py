"""Repository protocol for device persistence operations."""

from __future__ import annotations

from typing import Protocol

from .models import Device, DeviceState


class DeviceRepository(Protocol):
    """Storage contract the device service depends on.

    Listing methods return devices ordered by descending creation time and an
    empty list when nothing matches. Implementations hand back their own copies
    and never mutate the device they are given.
    """

    async def create(self, device: Device) -> None:
        """Persist a new device; raises ``DeviceAlreadyExistsError`` on a duplicate id."""
        ...

    async def get_by_id(self, device_id: str) -> Device:
        """Raises ``DeviceNotFoundError`` when the id is unknown."""
        ...

    async def list_all(self) -> list[Device]:
        ...

    async def list_by_brand(self, brand: str) -> list[Device]:
        ...

    async def list_by_state(self, state: DeviceState) -> list[Device]:
        ...

    async def update(self, device: Device) -> None:
        """Rewrite name, brand and state; raises ``DeviceNotFoundError`` if absent."""
        ...

    async def delete(self, device_id: str) -> None:
        """Raises ``DeviceNotFoundError`` if absent."""
        ...

    async def exists(self, device_id: str) -> bool:
        ...
