from fastapi import (
    APIRouter,
    Body,
    Depends,
    Response
)
from typing import Any

from fcm_token_provider.application.services.token_service import TokenService
from fcm_token_provider.utils.provider import get_token_service

router = APIRouter(prefix="/token", tags=["token"])


@router.get("")
def get_token(response: Response, service: TokenService = Depends(get_token_service)):
    result = service.get_token()

    if result["token"] is None:
        response.status_code = 202

    return result


@router.get("/cached")
def cached_token(service: TokenService = Depends(get_token_service)):
    return service.cached()


@router.get("/status")
def token_status(service: TokenService = Depends(get_token_service)):
    return service.status()


@router.post("/delivery")
def deliver_token(
    record: dict[str, Any] = Body(...),
    service: TokenService = Depends(get_token_service)
):
    return service.deliver(record)
