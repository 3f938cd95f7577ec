"""
Domain exceptions and their FastAPI handlers.

Every feature function catches storage/AI failures at its own boundary and
re-raises one of these with a user-safe message. Internal detail goes to the
log, never into the response body.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CareerCraftError(Exception):
    """Base exception for all CareerCraft errors"""
    status_code = 500
    error_code = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred. Please try again later."

    def __init__(self, message: str = None, details: dict = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class Unauthorized(CareerCraftError):
    """No session, or the bearer token did not verify"""
    status_code = 401
    error_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class UserNotFound(CareerCraftError):
    """Session is valid but no user row matches its subject"""
    status_code = 404
    error_code = "USER_NOT_FOUND"
    default_message = "User not found"


class NotFound(CareerCraftError):
    """A user-owned resource does not exist for the caller"""
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", details: dict = None):
        super().__init__(f"{resource} not found", details)


class MissingInput(CareerCraftError):
    """A required input field is absent or empty"""
    status_code = 400
    error_code = "MISSING_INPUT"
    default_message = "Missing required fields"

    def __init__(self, message: str = None, field: str = None, details: dict = None):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details)


class MalformedResponse(CareerCraftError):
    """The AI reply could not be parsed or had the wrong shape"""
    status_code = 502
    error_code = "MALFORMED_AI_RESPONSE"
    default_message = "The AI service returned an unexpected response"


class GenerationFailed(CareerCraftError):
    """The call to the external text-generation service failed"""
    status_code = 502
    error_code = "GENERATION_FAILED"
    default_message = "AI generation failed. Please try again later."


class PersistenceFailed(CareerCraftError):
    """A storage read or write failed"""
    status_code = 500
    error_code = "PERSISTENCE_FAILED"
    default_message = "A database error occurred. Please try again."


async def handle_careercraft_error(request: Request, exc: CareerCraftError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning(
            "Request failed",
            extra={"path": request.url.path, "error_code": exc.error_code},
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _missing_fields(errors) -> list[str]:
    fields = []
    for err in errors:
        if err["type"] == "missing" or ("input" in err and err["input"] is None):
            loc = [str(part) for part in err["loc"] if part != "body"]
            fields.append(".".join(loc) or "body")
    return fields


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Absent or null body fields are a MissingInput; other shape errors keep FastAPI's 422."""
    fields = _missing_fields(exc.errors())
    if not fields:
        return await request_validation_exception_handler(request, exc)
    missing = MissingInput(
        "Missing required fields",
        field=fields[0],
        details={"fields": fields},
    )
    return await handle_careercraft_error(request, missing)


def register_error_handlers(app: FastAPI):
    """Register the domain exception handlers with the FastAPI app"""
    app.add_exception_handler(CareerCraftError, handle_careercraft_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
