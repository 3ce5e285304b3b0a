from functools import lru_cache

from fcm_token_provider.application.events import EventBus
from fcm_token_provider.application.services.health_service import HealthService
from fcm_token_provider.application.services.token_cache import TokenCache
from fcm_token_provider.application.services.token_service import TokenService
from fcm_token_provider.config.settings import Settings
from fcm_token_provider.domain.repository.token_repository import TokenRepository
from fcm_token_provider.infra.client.firebase_auth import FirebaseAuthClient
from fcm_token_provider.infra.client.firebase_functions import FirebaseFunctionsClient
from fcm_token_provider.infra.persistence.token_repository_file import FileTokenRepository
from fcm_token_provider.infra.persistence.token_repository_memory import MemoryTokenRepository


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


@lru_cache(maxsize=1)
def get_repository() -> TokenRepository:
    settings = get_settings()

    if settings.STORE_BACKEND == "memory":
        return MemoryTokenRepository()

    return FileTokenRepository(settings.STORE_PATH)


@lru_cache(maxsize=1)
def get_event_bus() -> EventBus:
    return EventBus()


@lru_cache(maxsize=1)
def get_auth_client() -> FirebaseAuthClient:
    return FirebaseAuthClient(get_settings())


@lru_cache(maxsize=1)
def get_functions_client() -> FirebaseFunctionsClient:
    return FirebaseFunctionsClient(get_settings(), get_auth_client())


@lru_cache(maxsize=1)
def get_token_cache() -> TokenCache:
    return TokenCache(
        device_id=get_settings().DEVICE_ID,
        repository=get_repository(),
        auth=get_auth_client(),
        issuer=get_functions_client(),
        events=get_event_bus(),
    )


def get_health_service() -> HealthService:
    return HealthService(get_settings(), get_token_cache())


def get_token_service() -> TokenService:
    return TokenService(get_token_cache())
