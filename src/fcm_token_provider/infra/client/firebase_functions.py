import httpx
import logging

from concurrent.futures import (
    Executor,
    Future,
    ThreadPoolExecutor
)
from typing import (
    Any,
    Callable
)

from fcm_token_provider.config.settings import Settings
from fcm_token_provider.domain.errors import (
    NoResultError,
    TokenRequestError
)
from fcm_token_provider.infra.client.firebase_auth import FirebaseAuthClient

logger = logging.getLogger(__name__)

CallCompletion = Callable[[Any, Exception | None], None]


class FirebaseFunctionsClient:
    """Invokes HTTPS callable functions using the callable wire protocol."""

    def __init__(
        self,
        settings: Settings,
        auth: FirebaseAuthClient,
        executor: Executor | None = None,
        transport: httpx.BaseTransport | None = None
    ):
        self.__settings = settings
        self.__auth = auth
        self.__executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="firebase-functions")
        self.__transport = transport

    def call(self, name: str, data: dict[str, Any], completion: CallCompletion) -> Future:
        return self.__executor.submit(self.__call, name, data, completion)

    def get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        user = self.__auth.current_user

        if user is not None:
            headers["Authorization"] = f"Bearer {user.id_token}"

        return headers

    def __call(self, name: str, data: dict[str, Any], completion: CallCompletion) -> None:
        try:
            result = self.__request(name, data)
        except TokenRequestError as e:
            logger.debug(f"Callable {name} failed: {e.message}")
            completion(None, e)
            return

        logger.info(f"Callable {name} accepted")

        completion(result, None)

    def __request(self, name: str, data: dict[str, Any]) -> Any:
        try:
            return self.__post_callable(name, data)
        except TokenRequestError:
            raise
        except Exception as e:
            raise TokenRequestError(f"Callable {name} failed: {e!r}") from e

    def __post_callable(self, name: str, data: dict[str, Any]) -> Any:
        url = f"{self.__settings.functions_url}/{name}"

        try:
            with httpx.Client(timeout=self.__settings.HTTP_TIMEOUT, transport=self.__transport) as c:
                r = c.post(url, headers=self.get_headers(), json={"data": data})
        except httpx.HTTPError as e:
            raise TokenRequestError(f"Callable {name} request failed: {e}") from e

        try:
            payload = r.json()
        except ValueError:
            payload = None

        error = payload.get("error") if isinstance(payload, dict) else None

        if r.status_code >= 400 or error:
            error = error if isinstance(error, dict) else {}

            raise TokenRequestError(
                error.get("message") or f"Callable {name} failed with status {r.status_code}",
                details={
                    "status_code": r.status_code,
                    "status": error.get("status"),
                    "body": r.text
                }
            )

        result = payload.get("result") if isinstance(payload, dict) else None

        if result is None:
            raise NoResultError(details={"status_code": r.status_code, "body": r.text})

        return result
