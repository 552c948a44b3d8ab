"""Device domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .exceptions import DeviceInUseError, DeviceValidationError


class DeviceState(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in-use"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value: "DeviceState | str") -> "DeviceState":
        """Convert a raw value into a state, rejecting anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise DeviceValidationError(f"invalid device state: {value}") from exc


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Device:
    """A tracked physical device.

    ``id`` and ``creation_time`` are fixed at construction. ``name`` and
    ``brand`` can only change through :meth:`set_name_and_brand`, which refuses
    while the device is in use.
    """

    id: str
    name: str
    brand: str
    state: DeviceState
    creation_time: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        device_id: str,
        name: str,
        brand: str,
        state: DeviceState | str,
    ) -> "Device":
        if _is_blank(device_id):
            raise DeviceValidationError("device ID is required")
        if _is_blank(name):
            raise DeviceValidationError("device name is required")
        if _is_blank(brand):
            raise DeviceValidationError("device brand is required")
        return cls(
            id=device_id,
            name=name,
            brand=brand,
            state=DeviceState.parse(state),
            creation_time=utcnow(),
        )

    def can_mutate_identity(self) -> bool:
        return self.state is not DeviceState.IN_USE

    def can_delete(self) -> bool:
        return self.state is not DeviceState.IN_USE

    def set_state(self, state: DeviceState | str) -> None:
        self.state = DeviceState.parse(state)

    def set_name_and_brand(self, name: str, brand: str) -> None:
        if not self.can_mutate_identity():
            raise DeviceInUseError("cannot update name or brand of a device in use")
        if _is_blank(name):
            raise DeviceValidationError("device name cannot be empty")
        if _is_blank(brand):
            raise DeviceValidationError("device brand cannot be empty")
        self.name = name.strip()
        self.brand = brand.strip()


@dataclass(slots=True)
class DeviceCreateInput:
    name: str
    brand: str
    state: DeviceState | str


# Sentinel used to differentiate between "not provided" and an explicit value.
UNSET = object()


@dataclass(slots=True)
class DeviceUpdateInput:
    name: str | object = UNSET
    brand: str | object = UNSET
    state: DeviceState | str | object = UNSET
