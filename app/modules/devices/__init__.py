"""Device module: entity, lifecycle rules and the device service."""

from .exceptions import (
    DeviceAlreadyExistsError,
    DeviceDeadlineExceededError,
    DeviceError,
    DeviceInUseError,
    DeviceNotFoundError,
    DeviceRepositoryError,
    DeviceValidationError,
    ErrorKind,
)
from .models import UNSET, Device, DeviceCreateInput, DeviceState, DeviceUpdateInput
from .repository import DeviceRepository
from .service import DeviceService

__all__ = [
    "Device",
    "DeviceCreateInput",
    "DeviceState",
    "DeviceUpdateInput",
    "DeviceRepository",
    "DeviceService",
    "DeviceError",
    "DeviceAlreadyExistsError",
    "DeviceDeadlineExceededError",
    "DeviceInUseError",
    "DeviceNotFoundError",
    "DeviceRepositoryError",
    "DeviceValidationError",
    "ErrorKind",
    "UNSET",
]
