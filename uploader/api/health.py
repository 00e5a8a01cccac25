"""Health check endpoint."""

from pydantic import BaseModel

from uploader.core.logger import LogIcon, logger
from uploader.core.router import Router
from uploader.core.settings import settings as st

router = Router(__file__, prefix="")


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
    upload_dir: str
    upload_dir_ready: bool


def health_status() -> HealthResponse:
    ready = st.UPLOAD_DIR.is_dir()
    return HealthResponse(
        status="healthy" if ready else "degraded",
        service=st.API_NAME,
        version=st.API_VERSION,
        upload_dir=str(st.UPLOAD_DIR),
        upload_dir_ready=ready,
    )


@router.get("/health")
async def health_check() -> HealthResponse:
    logger.info("Health check requested", icon=LogIcon.HEALTHCHECK)
    return health_status()
