"""
Catalog Error Handlers.

Translate ``CatalogError`` subclasses and request validation failures into
JSON error bodies of the form ``{"detail": "<message>"}``. Field-level
problems are listed under ``errors`` as ``{"field", "message"}`` objects.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokecatalog.catalog.errors import CatalogError, CatalogValidationError
from pokecatalog.core.logging_config import get_logger
from pokecatalog.core.monitoring import log_error

logger = get_logger(__name__)

# Location prefixes FastAPI adds to validation error paths
_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc if part not in _LOCATION_SOURCES)


async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """
    Render a catalog error with the status code it carries.

    Server-side failures (5xx) are logged as errors; client errors at info level.
    """
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
        log_error(type(exc).__name__, exc.message, {"method": request.method, "path": request.url.path})
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    content: dict = {"detail": exc.message}
    if isinstance(exc, CatalogValidationError) and exc.field:
        content["errors"] = [{"field": exc.field, "message": exc.message}]
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as HTTP 400 with per-field messages."""
    errors = [{"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")} for err in exc.errors()]
    logger.info(f"{request.method} {request.url.path} -> 400: {errors}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request parameters", "errors": errors},
    )
