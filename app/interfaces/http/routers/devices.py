"""Device management endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from app.interfaces.http.deps import get_device_service
from app.modules.devices import (
    Device,
    DeviceCreateInput,
    DeviceService,
    DeviceUpdateInput,
    DeviceValidationError,
)
from app.schemas import DeviceCreate, DeviceResponse, DeviceUpdate, ErrorResponse

router = APIRouter()

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
}


def _to_schema(device: Device) -> DeviceResponse:
    return DeviceResponse.model_validate(device)


@router.post(
    "",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a device",
)
async def create_device(
    payload: DeviceCreate,
    service: DeviceService = Depends(get_device_service),
):
    device = await service.create_device(
        DeviceCreateInput(name=payload.name, brand=payload.brand, state=payload.state)
    )
    return _to_schema(device)


@router.get("", response_model=list[DeviceResponse], responses=_ERRORS, summary="List devices")
async def list_devices(
    brand: Optional[str] = None,
    state: Optional[str] = None,
    service: DeviceService = Depends(get_device_service),
):
    if brand is not None and state is not None:
        raise DeviceValidationError("filter by brand or by state, not both")
    if brand is not None:
        devices = await service.list_devices_by_brand(brand)
    elif state is not None:
        devices = await service.list_devices_by_state(state)
    else:
        devices = await service.list_devices()
    return [_to_schema(device) for device in devices]


@router.get("/{device_id}", response_model=DeviceResponse, responses=_ERRORS, summary="Get a device")
async def get_device(device_id: str, service: DeviceService = Depends(get_device_service)):
    device = await service.get_device(device_id)
    return _to_schema(device)


@router.api_route(
    "/{device_id}",
    methods=["PUT", "PATCH"],
    response_model=DeviceResponse,
    responses=_ERRORS,
    summary="Update a device",
)
async def update_device(
    device_id: str,
    payload: DeviceUpdate,
    service: DeviceService = Depends(get_device_service),
):
    # Explicit nulls are treated like omitted fields.
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None
    }
    device = await service.update_device(device_id, DeviceUpdateInput(**changes))
    return _to_schema(device)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERRORS,
    summary="Delete a device",
)
async def delete_device(device_id: str, service: DeviceService = Depends(get_device_service)):
    await service.delete_device(device_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
