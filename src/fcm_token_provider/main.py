import logging

from fastapi import FastAPI

from fcm_token_provider.infra.routes import (
    health,
    token
)
from fcm_token_provider.utils.provider import get_settings

logging.basicConfig(
    level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(title="FCM Token Provider API")

app.include_router(health.router)
app.include_router(token.router)
