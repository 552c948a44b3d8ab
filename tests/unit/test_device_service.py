"""Unit tests for DeviceService against the in-memory repository."""

import asyncio
from datetime import datetime, timezone
from itertools import product
from unittest.mock import AsyncMock

import pytest

from app.modules.devices import (
    DeviceAlreadyExistsError,
    DeviceCreateInput,
    DeviceDeadlineExceededError,
    DeviceInUseError,
    DeviceNotFoundError,
    DeviceRepositoryError,
    DeviceService,
    DeviceState,
    DeviceUpdateInput,
    DeviceValidationError,
    ErrorKind,
)
from tests.doubles import InMemoryDeviceRepository
from tests.factories import make_device


class TestCreateDevice:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("state", list(DeviceState))
    async def test_creates_and_persists(self, service, repository, state):
        started = datetime.now(timezone.utc)
        device = await service.create_device(
            DeviceCreateInput(name="iPhone 15", brand="Apple", state=state.value)
        )

        assert device.id
        assert device.name == "iPhone 15"
        assert device.brand == "Apple"
        assert device.state is state
        assert device.creation_time >= started
        assert await repository.get_by_id(device.id) == device

    @pytest.mark.asyncio
    async def test_generates_distinct_ids(self, service):
        payload = DeviceCreateInput(name="iPhone 15", brand="Apple", state="available")
        first = await service.create_device(payload)
        second = await service.create_device(payload)
        assert first.id != second.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, brand, state",
        [
            ("", "Apple", "available"),
            ("   ", "Apple", "available"),
            ("iPhone 15", "", "available"),
            ("iPhone 15", " ", "available"),
            ("iPhone 15", "Apple", "invalid"),
            ("iPhone 15", "Apple", ""),
        ],
    )
    async def test_invalid_input_is_rejected_without_persisting(
        self, service, repository, name, brand, state
    ):
        with pytest.raises(DeviceValidationError) as exc_info:
            await service.create_device(DeviceCreateInput(name=name, brand=brand, state=state))

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert repository.calls == []
        assert await repository.list_all() == []

    @pytest.mark.asyncio
    async def test_id_collision_surfaces_conflict(self, monkeypatch):
        repository = InMemoryDeviceRepository([make_device("fixed-id")])
        service = DeviceService(repository)
        monkeypatch.setattr(
            "app.modules.devices.service.generate_device_id", lambda: "fixed-id"
        )

        with pytest.raises(DeviceAlreadyExistsError) as exc_info:
            await service.create_device(
                DeviceCreateInput(name="Pixel 8", brand="Google", state="available")
            )
        assert exc_info.value.kind is ErrorKind.CONFLICT

    @pytest.mark.asyncio
    async def test_unexpected_storage_error_is_internal(self):
        repository = AsyncMock()
        repository.create.side_effect = RuntimeError("connection reset by peer")
        service = DeviceService(repository)

        with pytest.raises(DeviceRepositoryError) as exc_info:
            await service.create_device(
                DeviceCreateInput(name="Pixel 8", brand="Google", state="available")
            )
        assert exc_info.value.kind is ErrorKind.INTERNAL
        assert "connection reset" not in exc_info.value.message


class TestGetDevice:
    @pytest.mark.asyncio
    async def test_returns_last_persisted_value(self, seeded_service):
        device = await seeded_service.get_device("galaxy")
        assert device == make_device(
            "galaxy", name="Galaxy S24", brand="Samsung", state=DeviceState.INACTIVE, minutes=3
        )

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service):
        with pytest.raises(DeviceNotFoundError) as exc_info:
            await service.get_device("missing")
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    @pytest.mark.parametrize("device_id", ["", "   "])
    async def test_empty_id_is_rejected(self, service, repository, device_id):
        with pytest.raises(DeviceValidationError):
            await service.get_device(device_id)
        assert repository.calls == []


class TestListDevices:
    @pytest.mark.asyncio
    async def test_all_newest_first(self, seeded_service):
        devices = await seeded_service.list_devices()
        assert [device.id for device in devices] == ["ipad", "galaxy", "iphone", "pixel"]

    @pytest.mark.asyncio
    async def test_by_brand(self, seeded_service):
        devices = await seeded_service.list_devices_by_brand("Apple")
        assert [device.id for device in devices] == ["ipad", "iphone"]

    @pytest.mark.asyncio
    async def test_by_state(self, seeded_service):
        devices = await seeded_service.list_devices_by_state("in-use")
        assert [device.id for device in devices] == ["iphone"]

    @pytest.mark.asyncio
    async def test_no_matches_is_empty_list(self, seeded_service):
        assert await seeded_service.list_devices_by_brand("Nokia") == []
        assert await DeviceService(InMemoryDeviceRepository()).list_devices_by_state(
            DeviceState.INACTIVE
        ) == []

    @pytest.mark.asyncio
    async def test_empty_brand_is_rejected(self, seeded_service):
        with pytest.raises(DeviceValidationError):
            await seeded_service.list_devices_by_brand(" ")

    @pytest.mark.asyncio
    async def test_unknown_state_is_rejected(self, seeded_service):
        with pytest.raises(DeviceValidationError):
            await seeded_service.list_devices_by_state("retired")


class TestUpdateDevice:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("start, target", list(product(DeviceState, DeviceState)))
    async def test_state_only_update_for_every_pair(self, start, target):
        repository = InMemoryDeviceRepository([make_device(state=start)])
        service = DeviceService(repository)

        updated = await service.update_device("device-1", DeviceUpdateInput(state=target.value))

        assert updated.state is target
        assert (await repository.get_by_id("device-1")).state is target

    @pytest.mark.asyncio
    async def test_identity_change_blocked_while_in_use(self):
        repository = InMemoryDeviceRepository([make_device(state=DeviceState.IN_USE)])
        service = DeviceService(repository)

        with pytest.raises(DeviceInUseError) as exc_info:
            await service.update_device("device-1", DeviceUpdateInput(name="X"))
        assert exc_info.value.kind is ErrorKind.PRECONDITION_FAILED

        stored = await repository.get_by_id("device-1")
        assert (stored.name, stored.brand) == ("iPhone 15", "Apple")
        assert "update" not in repository.calls

    @pytest.mark.asyncio
    async def test_name_only_keeps_brand(self, service, repository):
        repository_device = make_device()
        await repository.create(repository_device)

        updated = await service.update_device("device-1", DeviceUpdateInput(name="iPhone 15 Pro"))

        assert updated.name == "iPhone 15 Pro"
        assert updated.brand == "Apple"
        stored = await repository.get_by_id("device-1")
        assert (stored.name, stored.brand) == ("iPhone 15 Pro", "Apple")

    @pytest.mark.asyncio
    async def test_brand_only_keeps_name(self, service, repository):
        await repository.create(make_device())
        updated = await service.update_device("device-1", DeviceUpdateInput(brand="Apple Inc."))
        assert (updated.name, updated.brand) == ("iPhone 15", "Apple Inc.")

    @pytest.mark.asyncio
    async def test_state_applied_before_identity(self):
        repository = InMemoryDeviceRepository([make_device(state=DeviceState.IN_USE)])
        service = DeviceService(repository)

        updated = await service.update_device(
            "device-1", DeviceUpdateInput(state="available", name="Renamed")
        )
        assert updated.state is DeviceState.AVAILABLE
        assert updated.name == "Renamed"

    @pytest.mark.asyncio
    async def test_moving_into_use_and_renaming_fails_as_a_whole(self, service, repository):
        await repository.create(make_device())

        with pytest.raises(DeviceInUseError):
            await service.update_device(
                "device-1", DeviceUpdateInput(state="in-use", name="Renamed")
            )

        stored = await repository.get_by_id("device-1")
        assert stored.state is DeviceState.AVAILABLE
        assert stored.name == "iPhone 15"

    @pytest.mark.asyncio
    async def test_explicit_empty_name_is_rejected(self, service, repository):
        await repository.create(make_device())
        with pytest.raises(DeviceValidationError):
            await service.update_device("device-1", DeviceUpdateInput(name="   "))
        assert (await repository.get_by_id("device-1")).name == "iPhone 15"

    @pytest.mark.asyncio
    async def test_invalid_state_is_validation(self, service, repository):
        await repository.create(make_device())
        with pytest.raises(DeviceValidationError):
            await service.update_device("device-1", DeviceUpdateInput(state="broken"))

    @pytest.mark.asyncio
    async def test_empty_patch_keeps_device(self, service, repository):
        await repository.create(make_device())
        updated = await service.update_device("device-1", DeviceUpdateInput())
        assert updated == make_device()

    @pytest.mark.asyncio
    async def test_creation_time_is_preserved(self, service, repository):
        original = make_device()
        await repository.create(original)
        updated = await service.update_device(
            "device-1", DeviceUpdateInput(name="Other", brand="Other", state="inactive")
        )
        assert updated.creation_time == original.creation_time

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service):
        with pytest.raises(DeviceNotFoundError):
            await service.update_device("missing", DeviceUpdateInput(state="available"))

    @pytest.mark.asyncio
    async def test_empty_id_is_rejected(self, service):
        with pytest.raises(DeviceValidationError):
            await service.update_device("", DeviceUpdateInput(state="available"))

    @pytest.mark.asyncio
    async def test_device_vanishing_before_save_is_not_found(self):
        repository = AsyncMock()
        repository.get_by_id.return_value = make_device()
        repository.update.side_effect = DeviceNotFoundError("device-1")
        service = DeviceService(repository)

        with pytest.raises(DeviceNotFoundError):
            await service.update_device("device-1", DeviceUpdateInput(state="inactive"))


class TestDeleteDevice:
    @pytest.mark.asyncio
    async def test_in_use_device_cannot_be_deleted(self):
        repository = InMemoryDeviceRepository([make_device(state=DeviceState.IN_USE)])
        service = DeviceService(repository)

        with pytest.raises(DeviceInUseError) as exc_info:
            await service.delete_device("device-1")

        assert exc_info.value.message == "cannot delete device in use"
        assert await repository.exists("device-1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("state", [DeviceState.AVAILABLE, DeviceState.INACTIVE])
    async def test_delete_then_get_is_not_found(self, state):
        repository = InMemoryDeviceRepository([make_device(state=state)])
        service = DeviceService(repository)

        await service.delete_device("device-1")

        with pytest.raises(DeviceNotFoundError):
            await service.get_device("device-1")

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service):
        with pytest.raises(DeviceNotFoundError):
            await service.delete_device("missing")

    @pytest.mark.asyncio
    async def test_empty_id_is_rejected(self, service):
        with pytest.raises(DeviceValidationError):
            await service.delete_device(" ")


class TestFailureClassification:
    @pytest.mark.asyncio
    async def test_slow_storage_exceeds_deadline(self):
        async def slow_get(device_id):
            await asyncio.sleep(1)

        repository = AsyncMock()
        repository.get_by_id.side_effect = slow_get
        service = DeviceService(repository, timeout=0.01)

        with pytest.raises(DeviceDeadlineExceededError) as exc_info:
            await service.get_device("device-1")
        assert exc_info.value.kind is ErrorKind.DEADLINE_EXCEEDED

    @pytest.mark.asyncio
    async def test_cancellation_propagates_unchanged(self):
        started = asyncio.Event()

        async def blocked_list():
            started.set()
            await asyncio.sleep(10)

        repository = AsyncMock()
        repository.list_all.side_effect = blocked_list
        service = DeviceService(repository)

        task = asyncio.create_task(service.list_devices())
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_storage_error_while_listing_is_internal(self):
        repository = AsyncMock()
        repository.list_by_brand.side_effect = OSError("disk gone")
        service = DeviceService(repository)

        with pytest.raises(DeviceRepositoryError):
            await service.list_devices_by_brand("Apple")


@pytest.mark.asyncio
async def test_device_lifecycle_scenario(service):
    device = await service.create_device(
        DeviceCreateInput(name="iPhone 15", brand="Apple", state="available")
    )

    await service.update_device(device.id, DeviceUpdateInput(state="in-use"))

    with pytest.raises(DeviceInUseError):
        await service.update_device(device.id, DeviceUpdateInput(name="X"))
    with pytest.raises(DeviceInUseError):
        await service.delete_device(device.id)

    await service.update_device(device.id, DeviceUpdateInput(state="available"))
    await service.delete_device(device.id)

    with pytest.raises(DeviceNotFoundError):
        await service.get_device(device.id)
