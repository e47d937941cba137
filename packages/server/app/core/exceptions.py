"""
Domain exceptions and the JSON error envelope they render to.

Every error response has the shape::

    {"error": {"code": "...", "message": "...", "status": 422, "fields": {...}}}
"""

from __future__ import annotations

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from prhub_shared.schemas.common import APIResponse, ErrorBody

log = structlog.get_logger()


class ProjectValidationError(Exception):
    """A project write was rejected; ``errors`` maps field name to messages."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(f"Project is invalid: {fields}")


def error_response(
    status: int,
    code: str,
    message: str,
    fields: dict[str, list[str]] | None = None,
) -> JSONResponse:
    body = APIResponse(
        error=ErrorBody(code=code, message=message, status=status, fields=fields)
    )
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


async def _project_validation_handler(
    request: Request, exc: ProjectValidationError
) -> JSONResponse:
    return error_response(422, "VALIDATION_FAILED", str(exc), fields=exc.errors)


async def _upstream_error_handler(
    request: Request, exc: httpx.HTTPStatusError
) -> JSONResponse:
    upstream_status = exc.response.status_code
    log.warning(
        "github.request_failed",
        url=str(exc.request.url),
        upstream_status=upstream_status,
    )
    return error_response(
        502,
        "UPSTREAM_ERROR",
        f"GitHub responded with {upstream_status}",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProjectValidationError, _project_validation_handler)
    app.add_exception_handler(httpx.HTTPStatusError, _upstream_error_handler)
