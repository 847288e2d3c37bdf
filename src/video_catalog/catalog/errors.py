"""Error taxonomy and mapping for the catalog.

Every failure leaving the catalog is one of four kinds:

- NotFound (404): no record for the id, or the id is not well formed
- Forbidden (403): principal is authenticated but does not own the record
- BadRequest (400): field-level input errors, carried as a list
- InternalError (500): anything unclassified

map_exception() is the single place where an exception becomes a status
code and a response body. Raw failure text is only exposed when the
service runs in diagnostic (debug) mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Video not found"
SERVER_ERROR_MESSAGE = "Server error"
BAD_REQUEST_MESSAGE = "Invalid request"


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str


class CatalogError(Exception):
    """Base class for failures with a stable external kind."""

    status_code: int = 500
    kind: str = "internal_error"
    default_message: str = SERVER_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CatalogError):
    """Record does not exist."""

    status_code = 404
    kind = "not_found"
    default_message = NOT_FOUND_MESSAGE


class MalformedIdentifierError(NotFoundError):
    """Identifier could not be parsed; reported as not found."""

    def __init__(self, raw_id: str) -> None:
        self.raw_id = raw_id
        super().__init__(NOT_FOUND_MESSAGE)


class ForbiddenError(CatalogError):
    """Principal may not act on this record."""

    status_code = 403
    kind = "forbidden"
    default_message = "Not authorized to modify this video"


class BadRequestError(CatalogError):
    """Structurally invalid input."""

    status_code = 400
    kind = "bad_request"
    default_message = BAD_REQUEST_MESSAGE

    def __init__(
        self, field_errors: list[FieldError] | None = None, message: str | None = None
    ) -> None:
        self.field_errors = list(field_errors or [])
        super().__init__(message)


class InternalError(CatalogError):
    """Unclassified store or runtime failure."""

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(message)


@dataclass
class ErrorPayload:
    """Status code and JSON body for an error response."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)


def map_exception(exc: BaseException, debug: bool = False) -> ErrorPayload:
    """Translate any exception into an external error payload.

    Args:
        exc: The failure to translate.
        debug: Diagnostic mode. When off, internal failure text is never
            included in the body.

    Returns:
        ErrorPayload with status code and body.
    """
    if isinstance(exc, BadRequestError):
        return ErrorPayload(
            status_code=exc.status_code,
            body={
                "message": exc.message,
                "errors": [{"field": e.field, "message": e.message} for e in exc.field_errors],
            },
        )

    if isinstance(exc, InternalError):
        return _internal_payload(exc.detail or exc.message, debug)

    if isinstance(exc, CatalogError):
        return ErrorPayload(status_code=exc.status_code, body={"message": exc.message})

    if isinstance(exc, SQLAlchemyError):
        logger.error(f"Store failure: {type(exc).__name__}")
    else:
        logger.error(f"Unhandled failure: {type(exc).__name__}")

    return _internal_payload(str(exc), debug)


def _internal_payload(detail: str, debug: bool) -> ErrorPayload:
    body: dict[str, Any] = {"message": SERVER_ERROR_MESSAGE}
    if debug:
        body["error"] = detail
    return ErrorPayload(status_code=500, body=body)


def field_errors_from_validation(errors: list[dict[str, Any]]) -> list[FieldError]:
    """Convert pydantic/FastAPI validation errors to field errors.

    The location prefix ("body", "query", "path") is dropped, so a failure
    at ("body", "rating") is reported as field "rating".

    Args:
        errors: Output of ValidationError.errors() / RequestValidationError.errors().

    Returns:
        List of FieldError in the order reported.
    """
    result: list[FieldError] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        message = str(err.get("msg", "Invalid value"))
        # pydantic prefixes custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        result.append(FieldError(field=".".join(loc) or "body", message=message))
    return result
