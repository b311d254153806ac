"""
Optional Pydantic Logfire tracing.

When ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is set,
``initialize_logfire`` configures Logfire and instruments SQLAlchemy (store
queries), httpx (PokeAPI calls) and FastAPI (endpoints). Otherwise Logfire
stays dormant and the ``log_*`` helpers only write debug logs.

Environment:
    LOGFIRE_ENABLED, LOGFIRE_TOKEN, LOGFIRE_ENVIRONMENT,
    LOGFIRE_SERVICE_NAME, LOGFIRE_SERVICE_VERSION,
    LOGFIRE_TRACE_SQLALCHEMY / _HTTPX / _FASTAPI (default true)
"""

import logging
import os
from typing import Callable, List, Optional, Tuple

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _env_flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "pokecatalog-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

LOGFIRE_TRACE_SQLALCHEMY = _env_flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _env_flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _env_flag("LOGFIRE_TRACE_FASTAPI", "true")

_logfire_active = False


def is_logfire_active() -> bool:
    return _logfire_active


def _instrumentations(app: Optional[FastAPI]) -> List[Tuple[str, Callable[[], object]]]:
    steps: List[Tuple[str, Callable[[], object]]] = []
    if LOGFIRE_TRACE_SQLALCHEMY:
        steps.append(("SQLAlchemy", logfire.instrument_sqlalchemy))
    if LOGFIRE_TRACE_HTTPX:
        steps.append(("HTTPX", logfire.instrument_httpx))
    if LOGFIRE_TRACE_FASTAPI:
        if app is None:
            logger.debug("No FastAPI app given, FastAPI instrumentation skipped")
        else:
            steps.append(("FastAPI", lambda: logfire.instrument_fastapi(app=app)))
    return steps


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Configure Logfire and enable the selected instrumentations.

    A failing instrumentation is logged and does not prevent the others.

    Args:
        app: Application to instrument; FastAPI tracing is skipped without it.
    """
    global _logfire_active

    if not LOGFIRE_ENABLED:
        logger.info("Logfire disabled (set LOGFIRE_ENABLED=true to enable)")
        return
    if not LOGFIRE_TOKEN:
        logger.warning("LOGFIRE_ENABLED is set but LOGFIRE_TOKEN is missing; tracing stays off")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Logfire configuration failed: {e}", exc_info=True)
        return
    _logfire_active = True

    for name, instrument in _instrumentations(app):
        try:
            instrument()
        except Exception as e:
            logger.warning(f"Logfire: {name} instrumentation failed: {e}")
        else:
            logger.info(f"Logfire: {name} instrumentation enabled")

    logger.info(f"Logfire active: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record a finished request in Logfire, or as a debug log while inactive."""
    if not _logfire_active:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
        return
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Logfire rejected request record for {method} {path}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """Forward an error with its context to Logfire when active."""
    if not _logfire_active:
        return
    try:
        logfire.error(f"{error_type}: {error_message}", **(context or {}))
    except Exception:
        logger.debug(f"Logfire rejected error record {error_type}")
