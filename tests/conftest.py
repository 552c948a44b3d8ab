"""Shared pytest fixtures for the device inventory tests."""

from __future__ import annotations

import pytest

from app.modules.devices import DeviceService, DeviceState
from tests.doubles import InMemoryDeviceRepository
from tests.factories import make_device


@pytest.fixture
def repository() -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository()


@pytest.fixture
def service(repository: InMemoryDeviceRepository) -> DeviceService:
    return DeviceService(repository)


@pytest.fixture
def seeded_repository() -> InMemoryDeviceRepository:
    return InMemoryDeviceRepository(
        [
            make_device("pixel", name="Pixel 8", brand="Google", minutes=1),
            make_device("iphone", name="iPhone 15", brand="Apple", state=DeviceState.IN_USE, minutes=2),
            make_device("galaxy", name="Galaxy S24", brand="Samsung", state=DeviceState.INACTIVE, minutes=3),
            make_device("ipad", name="iPad Air", brand="Apple", minutes=4),
        ]
    )


@pytest.fixture
def seeded_service(seeded_repository: InMemoryDeviceRepository) -> DeviceService:
    return DeviceService(seeded_repository)
