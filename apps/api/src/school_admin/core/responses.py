"""
Response Envelope Handlers

Exception handlers that render every error as the standard failure envelope:

    {"status": "failure", "message": "...", "data": ...}
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_admin.core.errors import ServiceError

logger = logging.getLogger(__name__)


def failure_response(
    status_code: int,
    message: str,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a failure envelope response."""
    content: dict[str, Any] = {"status": "failure", "message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Turn Pydantic error entries into one client-facing sentence."""
    missing = [
        str(error["loc"][-1])
        for error in errors
        if error.get("type") == "missing" and error.get("loc")
    ]
    if missing:
        return f"Missing required fields: {', '.join(missing)}."

    if not errors:
        return "Invalid request."

    first = errors[0]
    message = str(first.get("msg", "Invalid request.")).removeprefix("Value error, ")
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
    if location and first.get("type") != "value_error":
        return f"Invalid value for {'.'.join(location)}: {message}"
    return message


async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    return failure_response(exc.status_code, exc.message, headers=exc.headers)


async def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return failure_response(
        status.HTTP_400_BAD_REQUEST,
        describe_validation_errors(errors),
        data=errors,
    )


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return failure_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return failure_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
