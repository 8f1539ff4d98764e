"""Error responses.

Every error leaves the service as ``{"error": <message>}``.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        parts.append(f"{'.'.join(loc)}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON, a non-object body or a wrongly typed field."""
    logger.info("Rejected request body", extra={"path": request.url.path, "error_count": len(exc.errors())})
    return error_response(400, f"Invalid request body: {_describe_validation_error(exc)}")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method}
    )
    return error_response(500, GENERIC_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


async def catch_unhandled_errors(request: Request, call_next):
    """Turn an escaping exception into the generic 500 inside the CORS layer."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)
