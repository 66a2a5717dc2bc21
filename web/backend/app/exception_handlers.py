"""Exception handlers mapping gateway errors to plain-text responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from partgate.errors import GatewayError

logger = logging.getLogger("partgate.web")


def _gateway_error_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
    """Return the error message with the status of its kind."""
    return PlainTextResponse(str(exc), status_code=exc.status_code)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    """Malformed parameters are a bad request, not 422."""
    fields = ", ".join(
        ".".join(str(p) for p in err.get("loc", ())[1:]) or "request"
        for err in exc.errors()
    )
    return PlainTextResponse(f"Invalid request: {fields}", status_code=400)


def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return PlainTextResponse(str(exc) or type(exc).__name__, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
