# server/core/errors.py

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


# -------------------------------
# Error Taxonomy
# -------------------------------

class CatalogError(Exception):
    """
    Base class for errors returned to API callers.
    Rendered as {"error": message} with the class's status code.
    """
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(CatalogError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(CatalogError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(CatalogError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(CatalogError):
    status_code = 404
    default_message = "Not found"


class InternalError(CatalogError):
    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# -------------------------------
# Exception Handlers
# -------------------------------

async def handle_catalog_error(request: Request, exc: CatalogError):
    return error_response(exc.status_code, exc.message)


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return error_response(400, ClientInputError.default_message)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, InternalError.default_message)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
