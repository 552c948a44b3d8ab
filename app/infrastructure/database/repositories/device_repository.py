"""SQLAlchemy powered repository for device persistence."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Device as DeviceModel
from app.modules.devices.exceptions import DeviceAlreadyExistsError, DeviceNotFoundError
from app.modules.devices.models import Device, DeviceState
from app.modules.devices.repository import DeviceRepository


class SqlDeviceRepository(DeviceRepository):
    """Device repository backed by SQLAlchemy models.

    Every mutating call commits on its own, so no transaction outlives a
    single repository operation.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, device: Device) -> None:
        if await self.exists(device.id):
            raise DeviceAlreadyExistsError(device.id)

        model = DeviceModel(
            id=device.id,
            name=device.name,
            brand=device.brand,
            state=device.state.value,
            creation_time=device.creation_time,
        )
        self._session.add(model)
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DeviceAlreadyExistsError(device.id) from exc

    async def get_by_id(self, device_id: str) -> Device:
        stmt = select(DeviceModel).where(DeviceModel.id == device_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise DeviceNotFoundError(device_id)
        return self._to_domain(model)

    async def list_all(self) -> list[Device]:
        return await self._list(select(DeviceModel))

    async def list_by_brand(self, brand: str) -> list[Device]:
        return await self._list(select(DeviceModel).where(DeviceModel.brand == brand))

    async def list_by_state(self, state: DeviceState) -> list[Device]:
        return await self._list(select(DeviceModel).where(DeviceModel.state == state.value))

    async def update(self, device: Device) -> None:
        stmt = (
            update(DeviceModel)
            .where(DeviceModel.id == device.id)
            .values(name=device.name, brand=device.brand, state=device.state.value)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            await self._session.rollback()
            raise DeviceNotFoundError(device.id)
        await self._session.commit()

    async def delete(self, device_id: str) -> None:
        stmt = delete(DeviceModel).where(DeviceModel.id == device_id)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            await self._session.rollback()
            raise DeviceNotFoundError(device_id)
        await self._session.commit()

    async def exists(self, device_id: str) -> bool:
        stmt = select(exists().where(DeviceModel.id == device_id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def _list(self, stmt) -> list[Device]:
        stmt = stmt.order_by(DeviceModel.creation_time.desc())
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: DeviceModel) -> Device:
        creation_time: datetime = model.creation_time
        # SQLite drops the offset; stored values are always UTC.
        if creation_time.tzinfo is None:
            creation_time = creation_time.replace(tzinfo=timezone.utc)
        return Device(
            id=str(model.id),
            name=model.name,
            brand=model.brand,
            state=DeviceState(model.state),
            creation_time=creation_time,
        )
