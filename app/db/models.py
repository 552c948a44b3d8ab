"""SQLAlchemy ORM models."""

from sqlalchemy import CheckConstraint, Column, DateTime, String
from sqlalchemy.sql import func

from app.infrastructure.database.base import Base
from app.modules.devices.models import DeviceState

_STATE_VALUES = ", ".join(f"'{state.value}'" for state in DeviceState)


class Device(Base):
    __tablename__ = "devices"
    __table_args__ = (
        CheckConstraint(f"state IN ({_STATE_VALUES})", name="ck_devices_state"),
    )

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False, index=True)
    state = Column(String(20), nullable=False, index=True)
    creation_time = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
