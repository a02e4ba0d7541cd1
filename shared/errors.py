"""
Error taxonomy shared by the inventory and order services.

Services raise these; the handlers registered by register_exception_handlers()
turn them into {"detail": ...} JSON responses with the matching status code.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger(__name__)


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


class UpstreamAdjustmentError(ServiceError):
    """An inventory adjustment call failed. Never fatal to order creation."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Inventory adjustment failed"

    def __init__(self, product_id: int, reason: str, not_found: bool = False):
        self.product_id = product_id
        self.reason = reason
        self.not_found = not_found
        super().__init__(f"Stock adjustment for product {product_id} failed: {reason}")


async def service_error_handler(request: Request, exc: ServiceError):
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_failed",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=type(exc).__name__,
        detail=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors, same as InvalidRequest
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.info("request_invalid", path=request.url.path, method=request.method, errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": errors},
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("storage_failed", path=request.url.path, method=request.method, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": StorageError.default_message},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
