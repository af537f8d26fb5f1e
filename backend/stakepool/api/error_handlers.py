"""Error Handlers — map every failure to the ledger's JSON error envelope.

Invariants:
    - StakePoolError → its own http_status and to_response() body
    - RequestValidationError → 400 VALIDATION_ERROR with per-field details
    - Any other exception → 500 INTERNAL_ERROR, message never includes internals
    - Every envelope has the same top-level shape: {"error": {code, message, category, severity}}

Design Decisions:
    - Rejections (4xx) logged at WARNING, CRITICAL ledger errors and crashes at ERROR
    - The request path travels in `extra` so JSON logs can be filtered per route
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stakepool.core.errors import ErrorSeverity, StakePoolError

logger = logging.getLogger(__name__)


def _envelope(
    code: str, message: str, category: str, severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> dict:
    error = {
        "code": code,
        "message": message,
        "category": category,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}


async def handle_stakepool_error(request: Request, exc: StakePoolError) -> JSONResponse:
    level = logging.ERROR if exc.severity == ErrorSeverity.CRITICAL else logging.WARNING
    logger.log(
        level, "%s: %s", exc.code, exc.message,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
            "server_id": exc.context.server_id,
            "caller": exc.context.caller,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        "Rejected request body: %d invalid field(s)", len(details),
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data", "validation",
            ErrorSeverity.ERROR, details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled %s", type(exc).__name__, exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred", "internal",
            ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the three handler layers, most specific first."""
    app.add_exception_handler(StakePoolError, handle_stakepool_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
