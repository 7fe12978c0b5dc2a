"""Exception handlers that map failures onto the uniform error envelope.

Every error response has the shape ``{"success": false, "error": "..."}``;
validation failures also carry per-field ``details``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.exceptions import ValidationError as DomainValidationError
from pydantic import ValidationError as SchemaValidationError
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException

logger = structlog.get_logger(__name__)

_REQUIRED = "is required"


def _error(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def summarize(messages: dict) -> str:
    """Collapse per-field messages into a single human readable line."""
    missing = [field for field, errors in messages.items() if _REQUIRED in errors]
    others = [
        f"{field}: {error}" for field, errors in messages.items() for error in errors if error != _REQUIRED
    ]

    parts = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    parts.extend(others)
    return "; ".join(parts) or "Invalid request"


def _wire_names(messages: dict) -> dict:
    return {to_camel(str(field)): [str(m) for m in errors] for field, errors in messages.items()}


def _schema_messages(errors) -> dict:
    messages = {}
    for error in errors:
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        message = _REQUIRED if error["type"] == "missing" else error["msg"]
        messages.setdefault(field, []).append(message)
    return messages


async def domain_validation_error(request: Request, exc: DomainValidationError) -> JSONResponse:
    messages = exc.messages if isinstance(exc.messages, dict) else {"request": [str(exc.messages)]}
    messages = _wire_names(messages)
    logger.info("Validation failed", path=request.url.path, errors=messages)
    return _error(400, summarize(messages), messages)


async def schema_validation_error(request: Request, exc: SchemaValidationError) -> JSONResponse:
    messages = _schema_messages(exc.errors())
    logger.info("Request rejected", path=request.url.path, errors=messages)
    return _error(400, summarize(messages), messages)


async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = _schema_messages(exc.errors())
    logger.info("Request rejected", path=request.url.path, errors=messages)
    return _error(400, summarize(messages), messages)


async def not_found_error(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Submission not found", path=request.url.path)
    return _error(404, "Submission not found")


async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainValidationError, domain_validation_error)
    app.add_exception_handler(SchemaValidationError, schema_validation_error)
    app.add_exception_handler(RequestValidationError, request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, not_found_error)
    app.add_exception_handler(HTTPException, http_error)
    app.add_exception_handler(Exception, unexpected_error)
