"""Maps domain failures onto HTTP responses.

Every failure answers with ``{"success": false, "message": ...}`` and the
status carried by the error type.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace.errors import MarketplaceError

logger = structlog.get_logger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        return "; ".join(f"{field}: {', '.join(map(str, errors))}" for field, errors in messages.items())
    return str(messages)


def register_error_handlers(app: FastAPI) -> None:
    # Protean's defaults first; the handlers below replace them for the types we shape ourselves
    register_exception_handlers(app)

    @app.exception_handler(MarketplaceError)
    async def _marketplace_error(request: Request, exc: MarketplaceError):
        if exc.status_code >= 500:
            logger.error("Upstream call failed", path=request.url.path, error=exc.message)
        return _failure(exc.status_code, exc.message)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return _failure(400, _flatten(exc.messages))

    @app.exception_handler(ObjectNotFoundError)
    async def _not_found(request: Request, exc: ObjectNotFoundError):
        return _failure(404, str(exc) or "Not found")

    @app.exception_handler(ExpectedVersionError)
    async def _version_conflict(request: Request, exc: ExpectedVersionError):
        logger.warning("Concurrent update rejected", path=request.url.path, error=str(exc))
        return _failure(409, "The resource was modified concurrently, please retry")

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ())[1:])}: {error.get('msg')}" for error in errors
        )
        return _failure(400, message or "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _failure(exc.status_code, str(exc.detail))
