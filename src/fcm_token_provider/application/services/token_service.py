from concurrent.futures import Future
from fastapi import HTTPException
from typing import Any

from fcm_token_provider.application.services.token_cache import TokenCache
from fcm_token_provider.domain.errors import (
    SignInError,
    TokenProviderError,
    TokenRequestError
)
from fcm_token_provider.domain.models.token import (
    NO_TOKEN_MESSAGE,
    TOKEN_NOT_FOUND
)


class TokenService:
    def __init__(self, cache: TokenCache):
        self.__cache = cache

    def get_token(self) -> dict:
        future: Future = Future()

        self.__cache.with_token(lambda token, error: future.set_result((token, error)))

        token, error = future.result()

        if error is not None:
            raise self.__to_http_error(error)

        if token is None:
            return {"token": None, "detail": NO_TOKEN_MESSAGE}

        return {"token": token.access_token}

    def cached(self) -> dict:
        token = self.__cache.get_token_from_user_defaults()

        return {"token": token, "found": token != TOKEN_NOT_FOUND}

    def status(self) -> dict:
        return {"expired": self.__cache.is_expired()}

    def deliver(self, record: dict[str, Any]) -> dict:
        self.__cache.token_from_app_delegate(record)

        return {"stored": True}

    @staticmethod
    def __to_http_error(error: Exception) -> HTTPException:
        if isinstance(error, SignInError):
            return HTTPException(status_code=401, detail={"error": error.message, **error.details})

        if isinstance(error, TokenRequestError):
            return HTTPException(status_code=502, detail={"error": error.message, **error.details})

        if isinstance(error, TokenProviderError):
            return HTTPException(status_code=500, detail={"error": error.message})

        return HTTPException(status_code=500, detail={"error": str(error)})
