"""
orderdesk.api.errors

JSON error rendering for `api/*` routes.

Responsibilities:
- Render HTTP errors on API routes with the service's `message`/`error` shape.
- Defer to FastAPI's default handlers everywhere else.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, Response
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
)

from orderdesk.middleware.paths import path_matches

# Router-level 404/405 carry the bare status phrase as detail.
_DEFAULT_DETAILS = {"Not Found", "Method Not Allowed"}

_ERROR_BODIES: dict[int, dict[str, Any]] = {
    HTTP_401_UNAUTHORIZED: {
        "message": "Unauthenticated.",
        "status_code": HTTP_401_UNAUTHORIZED,
    },
    HTTP_404_NOT_FOUND: {
        "message": "Not found",
        "error": "The requested endpoint was not found",
        "status_code": HTTP_404_NOT_FOUND,
    },
    HTTP_405_METHOD_NOT_ALLOWED: {
        "message": "Method not allowed",
        "error": "The requested method is not allowed for this endpoint",
        "status_code": HTTP_405_METHOD_NOT_ALLOWED,
    },
}

_LOCATION_PARTS = {"body", "query", "path", "header", "cookie"}


def error_body(exc: StarletteHTTPException) -> dict[str, Any]:
    if exc.status_code == HTTP_401_UNAUTHORIZED:
        return dict(_ERROR_BODIES[HTTP_401_UNAUTHORIZED])
    if exc.status_code in _ERROR_BODIES and exc.detail in _DEFAULT_DETAILS:
        return dict(_ERROR_BODIES[exc.status_code])
    # status_code is appended by StatusCodeMiddleware.
    return {"message": exc.detail}


def validation_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in _LOCATION_PARTS]
        field = ".".join(loc) or "request"
        errors.setdefault(field, []).append(str(err.get("msg", "Invalid value")))
    return errors


def register_error_handlers(app: FastAPI, *, api_prefix: str) -> None:
    async def _http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if not path_matches(request.url.path, api_prefix):
            return await http_exception_handler(request, exc)
        return JSONResponse(error_body(exc), status_code=exc.status_code, headers=exc.headers)

    async def _validation_error(request: Request, exc: RequestValidationError) -> Response:
        if not path_matches(request.url.path, api_prefix):
            return await request_validation_exception_handler(request, exc)
        return JSONResponse(
            {"message": "The given data was invalid.", "errors": validation_errors(exc)},
            status_code=422,
        )

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)


# --- Module Notes -----------------------------------------------------------
# Responses produced here still pass through StatusCodeMiddleware on the way out,
# so only the bodies with a fixed contract spell out `status_code` themselves.
