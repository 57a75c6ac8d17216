"""
Exception Handlers.

Turn exceptions into the error envelope of core.responses:

    ApplicationError         its own status and key, cause in ``extra``
    RequestValidationError   400 dataMiddleware-1001, validator errors in ``extra``
    anything else            500 server-1000, no details

Client errors are logged as warnings and server errors as errors, with
the request id.

Usage:
    app = FastAPI()
    register_exception_handlers(app)
"""

import json
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blog.backend.core.exceptions import ApplicationError
from blog.backend.core.i18n import request_locale
from blog.backend.core.logging import get_logger
from blog.backend.core.responses import error_response

logger = get_logger(__name__)

VALIDATION_ERROR_KEY = "dataMiddleware-1001"
UNHANDLED_ERROR_KEY = "server-1000"


def _request_fields(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": getattr(request.state, "request_id", None)
        or request.headers.get("x-request-id"),
    }


def _respond(request: Request, status_code: int, key: str, error: Any = None) -> JSONResponse:
    fields = {"key": key, "status": status_code, **_request_fields(request)}
    if error is not None:
        fields["error"] = str(error)
    log = logger.error if status_code >= 500 else logger.warning
    log("Request rejected", extra=fields)
    return error_response(status_code, key, error, request_locale(request))


def _validation_detail(exc: RequestValidationError) -> str:
    """The validator's error list as a JSON string."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]
    return json.dumps(jsonable_encoder(errors), ensure_ascii=False)


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    return _respond(request, exc.status_code, exc.key, exc.error)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _respond(request, 400, VALIDATION_ERROR_KEY, _validation_detail(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort for failures outside endpoint bodies (dependencies,
    middleware). The traceback is logged; the response stays generic.
    """
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_request_fields(request)},
    )
    return error_response(500, UNHANDLED_ERROR_KEY, None, request_locale(request))


def register_exception_handlers(app: FastAPI) -> None:
    """Register every handler above on ``app``."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
