"""
Failure types raised by the core components.

Each carries the HTTP status it maps to and a message that is safe to show
to the client. The handlers in `install_exception_handlers` translate them at
the request boundary; anything else is logged and answered with a generic 500.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class CommerceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationFailure(CommerceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class ForbiddenError(CommerceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class BadRequestError(CommerceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class MissingFieldError(BadRequestError):
    default_detail = "Missing required field"


class InvalidReferenceError(BadRequestError):
    """A referenced branch, customer or product is absent, inactive or foreign."""

    def __init__(self, reference: str, detail: Optional[str] = None):
        self.reference = reference
        super().__init__(detail or f"Invalid {reference}")


class NotFoundError(CommerceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class TransactionError(CommerceError):
    default_detail = "Transaction failed"


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CommerceError)
    async def commerce_error_handler(request: Request, exc: CommerceError):
        headers = None
        if isinstance(exc, AuthenticationFailure):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": f"{field}: {message}" if field else message},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
