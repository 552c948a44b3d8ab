"""Device domain specific exceptions."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine readable failure classification."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PRECONDITION_FAILED = "precondition_failed"
    INTERNAL = "internal"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class DeviceError(Exception):
    """Base class for device related domain errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "device operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DeviceValidationError(DeviceError):
    """Raised when caller supplied input is missing or malformed."""

    kind = ErrorKind.VALIDATION
    default_message = "invalid device input"


class DeviceNotFoundError(DeviceError):
    """Raised when the requested device could not be found."""

    kind = ErrorKind.NOT_FOUND
    default_message = "device not found"

    def __init__(self, device_id: str | None = None) -> None:
        self.device_id = device_id
        message = f"device with ID {device_id} not found" if device_id else None
        super().__init__(message)


class DeviceAlreadyExistsError(DeviceError):
    """Raised when attempting to create a device with an existing id."""

    kind = ErrorKind.CONFLICT
    default_message = "device already exists"

    def __init__(self, device_id: str | None = None) -> None:
        self.device_id = device_id
        message = f"device with ID {device_id} already exists" if device_id else None
        super().__init__(message)


class DeviceInUseError(DeviceError):
    """Raised when the device lifecycle state blocks a mutation or deletion."""

    kind = ErrorKind.PRECONDITION_FAILED
    default_message = "device in use"


class DeviceRepositoryError(DeviceError):
    """Raised when persistence fails for a reason the caller cannot fix."""

    kind = ErrorKind.INTERNAL
    default_message = "device storage failure"


class DeviceDeadlineExceededError(DeviceError):
    """Raised when a storage call does not finish within the allowed time."""

    kind = ErrorKind.DEADLINE_EXCEEDED
    default_message = "device operation timed out"
