"""Translate domain failures into HTTP responses."""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.modules.devices import DeviceError, ErrorKind
from app.schemas import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.PRECONDITION_FAILED: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.DEADLINE_EXCEEDED: status.HTTP_504_GATEWAY_TIMEOUT,
}


def error_response(status_code: int, kind: ErrorKind, message: str) -> JSONResponse:
    body = ErrorResponse(
        error=HTTPStatus(status_code).phrase,
        kind=kind.value,
        message=message,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def device_error_handler(request: Request, exc: DeviceError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(status_code, exc.kind, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorKind.VALIDATION,
        f"invalid request: {details}" if details else "invalid request",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DeviceError, device_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
