import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class TaskListError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = SERVER_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


class ValidationError(TaskListError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TaskListError):
    status_code = status.HTTP_404_NOT_FOUND


class TransactionError(TaskListError):
    """A multi-statement write was rolled back."""


class StoreError(TaskListError):
    pass


def _message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def tasklist_error_handler(request: Request, exc: TaskListError):
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__,
        )
        return _message_response(exc.status_code, SERVER_ERROR_MESSAGE)
    return _message_response(exc.status_code, exc.message)


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    error = StoreError(f"Store failure: {type(exc).__name__}")
    error.__cause__ = exc
    return await tasklist_error_handler(request, error)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _message_response(status.HTTP_400_BAD_REQUEST, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskListError, tasklist_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
