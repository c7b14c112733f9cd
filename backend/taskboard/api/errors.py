"""Exception handlers translating failures into the ``{error, ...}`` JSON shape."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskboard.core.errors import TaskAPIError, TaskValidationError, classify_store_error

logger = logging.getLogger(__name__)

ACTIONS = {
    "GET": "fetch tasks",
    "POST": "create task",
    "PUT": "update task",
    "PATCH": "update task",
    "DELETE": "delete task",
}


def _render(error: TaskAPIError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def task_api_error_handler(request: Request, exc: TaskAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _render(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors: 400 rather than FastAPI's 422."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return _render(TaskValidationError("Invalid request", details="; ".join(problems)))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = classify_store_error(exc, ACTIONS.get(request.method, "complete the request"))
    return _render(error)


def register_exception_handlers(application: FastAPI) -> None:
    application.add_exception_handler(TaskAPIError, task_api_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(SQLAlchemyError, store_error_handler)
