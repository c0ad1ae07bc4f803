"""
Error Responses - Science Fair Evaluation Platform
fairscore/routers/errors.py

Shared error schema and exception handlers. Every error body has the same
shape: error_code, message, details, timestamp.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fairscore.core.exceptions import (
    AuthError,
    DuplicateEntityException,
    EntityNotFoundException,
    LifecycleError,
    PanelCompositionError,
    RemoteError,
    ValidationError,
)


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def error_json(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )


#  Validation Error Messages


FIELD_MESSAGES = {
    "title": {
        "missing": "Project title is required",
        "string_too_short": "Project title cannot be empty",
        "string_too_long": "Project title must not exceed 255 characters",
    },
    "name": {
        "missing": "Name is required",
        "string_too_short": "Name cannot be empty",
    },
    "email": {
        "missing": "Email is required",
        "value_error": "Email must contain '@'",
    },
    "code": {
        "string_pattern_mismatch": "Access code must be 4-10 digits",
    },
    "adminPass": {
        "string_too_short": "Admin passcode cannot be empty",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "string_pattern_mismatch": "Field '{field}' has invalid format",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "list_type": "Field '{field}' must be a list",
    "dict_type": "Field '{field}' must be an object",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    name = field.split(".")[-1]
    if name in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[name]:
            if key in error_type:
                return FIELD_MESSAGES[name][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return error_json(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", "Request validation failed")
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return error_json(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Malformed JSON request body")
    field = ".".join(str(part) for part in loc if part != "body")
    return error_json(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        get_validation_message(field, error_type),
        {"field": field, "type": error_type} if field else None,
    )


#  Domain Exception Handlers


async def score_validation_handler(request: Request, exc: ValidationError):
    code = "PANEL_COMPOSITION" if isinstance(exc, PanelCompositionError) else "VALIDATION_ERROR"
    details = {"criterion": exc.criterion} if exc.criterion else None
    return error_json(status.HTTP_422_UNPROCESSABLE_ENTITY, code, exc.message, details)


async def lifecycle_handler(request: Request, exc: LifecycleError):
    return error_json(status.HTTP_409_CONFLICT, "LIFECYCLE_ERROR", exc.message)


async def auth_handler(request: Request, exc: AuthError):
    return error_json(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", exc.message)


async def remote_handler(request: Request, exc: RemoteError):
    details = {"status_code": exc.status_code} if exc.status_code else None
    return error_json(status.HTTP_502_BAD_GATEWAY, "REMOTE_ERROR", exc.message, details)


async def not_found_handler(request: Request, exc: EntityNotFoundException):
    code = f"{exc.entity_type.upper()}_NOT_FOUND"
    return error_json(status.HTTP_404_NOT_FOUND, code, str(exc), {"id": exc.entity_id})


async def duplicate_handler(request: Request, exc: DuplicateEntityException):
    return error_json(status.HTTP_409_CONFLICT, "DUPLICATE_ENTITY", exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, score_validation_handler)
    app.add_exception_handler(LifecycleError, lifecycle_handler)
    app.add_exception_handler(AuthError, auth_handler)
    app.add_exception_handler(RemoteError, remote_handler)
    app.add_exception_handler(EntityNotFoundException, not_found_handler)
    app.add_exception_handler(DuplicateEntityException, duplicate_handler)
