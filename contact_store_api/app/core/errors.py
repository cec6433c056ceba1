"""
Error taxonomy and FastAPI exception handlers.

Services raise the exceptions defined here; ``setup_error_handling``
registers handlers that translate them into the JSON bodies clients
expect.  Every failure response carries an ``error`` key, plus
``errors`` (field → message) for validation problems or ``details``
for server‑side failures.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ContactStoreError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Something went wrong!"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(ContactStoreError):
    """Input rejected before any persistence attempt."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__()
        self.errors = errors

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "errors": self.errors}


class DuplicateEmailError(ValidationError):
    """Another contact already uses the email address."""

    def __init__(self) -> None:
        super().__init__({"email": "Email already exists"})


class NoValidFieldsError(ContactStoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No valid fields to update"


class NotFoundError(ContactStoreError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Contact not found"


class DatastoreError(ContactStoreError):
    """A SQLite call failed; the driver's message is passed through."""

    message = "Database error"

    def __init__(self, details: str) -> None:
        super().__init__()
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


async def contact_store_error_handler(request: Request, exc: ContactStoreError) -> JSONResponse:
    if isinstance(exc, DatastoreError):
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests (bad JSON, non‑integer ids, bad paging) as 400.

    The last element of each error location is used as the field name,
    so ``("query", "page")`` becomes ``page``.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        field = str(loc[-1]) if len(loc) > 1 else str(loc[0])
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationError.message, "errors": errors},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": ContactStoreError.message, "details": str(exc)},
    )


def setup_error_handling(app: FastAPI) -> None:
    """Register the exception handlers on ``app``."""
    app.add_exception_handler(ContactStoreError, contact_store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
