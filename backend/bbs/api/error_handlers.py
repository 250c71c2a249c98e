"""Error Handlers: global exception handlers for the board API.

Invariants:
    - BoardError → {"error": message[, "details"]} with the error's http_status
    - RequestValidationError on unparseable JSON → 400 "Invalid JSON"
    - RequestValidationError otherwise → 400 "Validation failed" with
      {"formErrors": [...], "fieldErrors": {field: [msg, ...]}}
    - HTTPException → {"error": detail} with its status, logged as a warning
    - Exception (catch-all) → 500, never crashes the process
    - Every handler logs method and path as structured extras
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bbs.core.errors import BoardError, MalformedRequestError, PayloadValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_board_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _request_extra(request: Request, **fields) -> dict:
    return {"method": request.method, "path": request.url.path, **fields}


def _register_board_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BoardError)
    async def board_error_handler(request: Request, exc: BoardError):
        """Handle all board domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"{exc.code}: {exc.message}",
            extra=_request_extra(
                request, error_code=exc.code, status_code=exc.http_status,
            ),
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Split unparseable bodies from field-level violations."""
        errors = exc.errors()
        if _is_malformed_body(errors):
            error: BoardError = MalformedRequestError()
        else:
            error = PayloadValidationError(flatten_validation_errors(errors))
        logger.warning(
            f"Rejected request body: {error.message}",
            extra=_request_extra(
                request, error_code=error.code, status_code=error.http_status,
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        logger.warning(
            f"HTTP {exc.status_code}: {exc.detail}",
            extra=_request_extra(request, status_code=exc.status_code),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: logged with traceback, converted to a 500."""
        logger.error(
            f"Unhandled exception: {exc}",
            exc_info=True,
            extra=_request_extra(
                request, error_code="INTERNAL_ERROR", status_code=500,
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error"},
        )


def _is_malformed_body(errors) -> bool:
    return any(e["type"] == "json_invalid" for e in errors)


def flatten_validation_errors(errors) -> dict:
    """Group validation messages by top-level body field.

    Errors located at the body itself (wrong JSON type) go to formErrors.
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for e in errors:
        loc = tuple(e["loc"])
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        if not loc:
            form_errors.append(e["msg"])
            continue
        field_errors.setdefault(str(loc[0]), []).append(e["msg"])
    return {"formErrors": form_errors, "fieldErrors": field_errors}
