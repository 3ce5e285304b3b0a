import logging

from collections.abc import Mapping
from typing import (
    Any,
    Callable,
    Protocol
)

from fcm_token_provider.application.events import EventBus
from fcm_token_provider.domain.models.token import (
    GET_TOKEN_API,
    RETRIEVING_TOKEN_EVENT,
    TOKEN_NOT_FOUND,
    TOKEN_RECEIVED_EVENT,
    Token,
    TokenRecord
)
from fcm_token_provider.domain.repository.token_repository import TokenRepository

logger = logging.getLogger(__name__)

TokenCallback = Callable[[str | None, Exception | None], None]
TokenResultCallback = Callable[[Token | None, Exception | None], None]


class AuthBackend(Protocol):
    def sign_in_anonymously(self, completion: Callable[[Any, Exception | None], None]) -> Any:
        ...


class TokenIssuer(Protocol):
    def call(self, name: str, data: dict[str, Any], completion: Callable[[Any, Exception | None], None]) -> Any:
        ...


class TokenCache:
    """Hands out the cached bearer token, refreshing it when expired.

    A refresh signs in anonymously and then asks the ``getOAuthToken``
    callable for a new token. The callable does not return the token: it
    arrives later through :meth:`token_from_app_delegate`, so a successful
    refresh reports ``(None, None)`` and callers ask again.
    """

    def __init__(
        self,
        device_id: str,
        repository: TokenRepository,
        auth: AuthBackend,
        issuer: TokenIssuer,
        events: EventBus | None = None
    ):
        self.__device_id = device_id
        self.__repository = repository
        self.__auth = auth
        self.__issuer = issuer
        self.events = events or EventBus()

    def is_expired(self) -> bool:
        return TokenRecord.from_mapping(self.__repository.get()).is_expired()

    def get_token(self, callback: TokenCallback) -> None:
        self.__get_token(callback, healed=False)

    def __get_token(self, callback: TokenCallback, healed: bool) -> None:
        record = TokenRecord.from_mapping(self.__repository.get())

        if record.is_expired():
            self.__refresh(callback)
            return

        if record.bearer is not None:
            logger.debug("Serving cached token")
            callback(record.bearer, None)
            return

        if healed:
            self.__refresh(callback)
            return

        logger.info("Clearing unreadable cached token")
        self.__repository.clear()
        self.__get_token(callback, healed=True)

    def __refresh(self, callback: TokenCallback) -> None:
        logger.info("Cached token expired, requesting a new one")
        self.events.emit(RETRIEVING_TOKEN_EVENT)

        def on_signed_in(_session: Any, error: Exception | None) -> None:
            if error is not None:
                callback(None, error)
                return

            self.__retrieve_access_token(callback)

        self.__auth.sign_in_anonymously(on_signed_in)

    def __retrieve_access_token(self, callback: TokenCallback) -> None:
        def on_result(_result: Any, error: Exception | None) -> None:
            if error is not None:
                callback(None, error)
                return

            callback(None, None)

        self.__issuer.call(GET_TOKEN_API, {"deviceID": self.__device_id}, on_result)

    def token_from_app_delegate(self, record: Mapping[str, Any]) -> None:
        self.__repository.set(record)
        logger.info("Stored delivered token")

        self.events.emit(TOKEN_RECEIVED_EVENT, dict(record))

    def get_token_from_user_defaults(self) -> str:
        bearer = TokenRecord.from_mapping(self.__repository.get()).bearer

        return bearer if bearer is not None else TOKEN_NOT_FOUND

    def with_token(self, callback: TokenResultCallback) -> None:
        def on_token(token: str | None, error: Exception | None) -> None:
            if token is not None:
                callback(Token(access_token=token), error)
            else:
                callback(None, error)

        self.get_token(on_token)
