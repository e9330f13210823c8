from fastapi import APIRouter

from infrastructure.services import SettingsDep

router = APIRouter(tags=["System"])


# Load balancer healthcheck; must not touch the database.
@router.get("/health")
def get_health():
    """Healthcheck endpoint."""
    return {"status": "ok"}


@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}
