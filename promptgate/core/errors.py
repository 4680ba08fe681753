"""Error taxonomy for the gateway and the handlers that render it."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GatewayError(RuntimeError):
    """Base error rendered as ``{"error": message[, "detail": detail]}``."""

    status_code: int = 500

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_body(self) -> dict:
        body: dict = {"error": self.message}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class ClientInputError(GatewayError):
    """A required field is missing or malformed."""

    status_code = 400


class MethodNotAllowed(GatewayError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed") -> None:
        super().__init__(message)


class UpstreamFailure(GatewayError):
    """The model service raised while serving a request."""

    status_code = 500

    @classmethod
    def from_exception(cls, message: str, exc: BaseException) -> UpstreamFailure:
        return cls(message, detail=str(exc) or exc.__class__.__name__)


class VerdictParseError(ValueError):
    """Model output did not match the verdict schema. Never leaves the evaluator."""


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        body = MethodNotAllowed().to_body()
    else:
        body = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=ClientInputError.status_code,
        content=ClientInputError("invalid request body", detail=errors).to_body(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every gateway error with the same ``{"error": ...}`` body shape."""
    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
