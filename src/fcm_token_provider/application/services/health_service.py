from datetime import (
    datetime,
    timezone
)

from fcm_token_provider.application.services.token_cache import TokenCache
from fcm_token_provider.config.settings import Settings
from fcm_token_provider.domain.models.token import TOKEN_NOT_FOUND


class HealthService:
    def __init__(self, settings: Settings, cache: TokenCache):
        self.__settings = settings
        self.__cache = cache

    def get_health(self) -> dict:
        cached = self.__cache.get_token_from_user_defaults() != TOKEN_NOT_FOUND
        expired = self.__cache.is_expired()

        return {
            "status": "ok" if cached and not expired else "refresh_needed",
            "service": self.__settings.SERVICE_NAME,
            "checked_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "token": {
                "cached": cached,
                "expired": expired
            }
        }

    def get_config_check(self) -> dict:
        return {
            "device_id_set": bool(self.__settings.DEVICE_ID),
            "api_key_set": bool(self.__settings.FIREBASE_API_KEY),
            "project_id": self.__settings.FIREBASE_PROJECT_ID,
            "functions_url": self.__settings.functions_url,
            "store_backend": self.__settings.STORE_BACKEND
        }
