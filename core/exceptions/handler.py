from typing import Any
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.logging.logger import get_logger
from core.response import ResponseModel
from core.config import settings


class BusinessException(Exception):
    """Base class for business exceptions."""
    def __init__(self, message: str, status_code: int = 200, code: int = 400, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.detail = detail


class RepositoryError(Exception):
    """Base class for errors raised by repository implementations."""


class InvalidEntityError(RepositoryError):
    """The entity cannot be used for the requested operation (e.g. update without id)."""


class StorageError(RepositoryError):
    """Opening a connection, executing a statement or reading a row failed.

    The driver exception is kept as ``__cause__``.
    """


def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    trace_id = getattr(request.state, "trace_id", "unknown")
    logger = get_logger("exception_handler", request=request)

    if isinstance(exc, BusinessException):
        logger.warning(f"Trace[{trace_id}] - BusinessError: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(code=exc.code, message=exc.message, data=exc.detail)
        )

    if isinstance(exc, InvalidEntityError):
        logger.warning(f"Trace[{trace_id}] - InvalidEntity: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ResponseModel.fail(code=400, message=str(exc))
        )

    if isinstance(exc, RequestValidationError):
        logger.error(f"Trace[{trace_id}] - ValidationError: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content=ResponseModel.fail(
                code=422,
                message="Invalid request parameters",
                data=[{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
            )
        )

    if isinstance(exc, (StorageError, SQLAlchemyError)):
        cause = exc.__cause__ or exc
        logger.critical(f"Trace[{trace_id}] - DatabaseError: {cause}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ResponseModel.fail(code=500, message="Service temporarily unavailable")
        )

    logger.opt(exception=True).error(f"Trace[{trace_id}] - UncaughtException: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseModel.fail(
            code=500,
            message="System busy, please try again later",
            data={"trace_id": trace_id} if settings.DEBUG else None
        )
    )
