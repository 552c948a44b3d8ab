"""Pydantic schemas used by the HTTP interface."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.devices import DeviceState


class DeviceCreate(BaseModel):
    name: str = Field(..., description="Display name, e.g. iPhone 15")
    brand: str = Field(..., description="Manufacturer, e.g. Apple")
    state: str = Field(..., description="available, in-use or inactive")


class DeviceUpdate(BaseModel):
    """Partial update; omitted or null fields are left unchanged."""

    name: Optional[str] = None
    brand: Optional[str] = None
    state: Optional[str] = None


class DeviceResponse(BaseModel):
    id: str
    name: str
    brand: str
    state: DeviceState
    creation_time: datetime

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    error: str
    kind: str
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
