"""Translate domain errors and unexpected failures into JSON responses."""
import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.errors import AppError

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "%s %s -> %s %s: %s",
        request.method, request.url.path, exc.status_code, type(exc).__name__, exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning("%s %s -> 400 invalid request: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": details},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route not found"
    else:
        message = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)

    if request.app.state.settings.is_production:
        body = {"error": {"message": "Internal Server Error"}}
    else:
        body = {
            "error": {
                "message": str(exc) or type(exc).__name__,
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            }
        }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


async def catch_unhandled_errors(request: Request, call_next):
    """
    Turn crashes into the 500 body inside the middleware stack.

    Registered before CORS so CORS wraps it and error responses stay
    readable from the browser.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Must run before add_cors_middleware."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
