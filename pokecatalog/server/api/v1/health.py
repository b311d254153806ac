"""
Health and version endpoints used by deployments and monitors.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from pokecatalog.core.logging_config import get_logger
from pokecatalog.server.core import constant
from pokecatalog.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report whether the server is up and the record store answers.",
    responses={503: {"description": "Record store unreachable"}},
)
async def health_check(session: SessionDep):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Health check: database unavailable: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unavailable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get("/version", summary="Get Version")
async def version():
    return {"name": constant.PROJECT_NAME, "version": constant.VERSION}
