from fastapi import (
    APIRouter,
    Depends
)

from fcm_token_provider.application.services.health_service import HealthService
from fcm_token_provider.utils.provider import get_health_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def token_health(service: HealthService = Depends(get_health_service)):
    """Liveness plus whether a usable token is cached; never triggers a refresh."""
    return service.get_health()


@router.get("/config")
def config_check(service: HealthService = Depends(get_health_service)):
    return service.get_config_check()
