import httpx
import logging
import time

from concurrent.futures import (
    Executor,
    Future,
    ThreadPoolExecutor
)
from dataclasses import dataclass
from jose import jwt
from jose.exceptions import JOSEError
from typing import Callable

from fcm_token_provider.config.settings import Settings
from fcm_token_provider.domain.errors import SignInError

logger = logging.getLogger(__name__)


@dataclass
class AnonymousSession:
    uid          : str
    id_token     : str
    refresh_token: str | None
    expires_at   : float


SignInCompletion = Callable[[AnonymousSession | None, Exception | None], None]


class FirebaseAuthClient:
    """Anonymous sign-in against the Identity Toolkit REST API."""

    def __init__(
        self,
        settings: Settings,
        executor: Executor | None = None,
        transport: httpx.BaseTransport | None = None
    ):
        self.__settings = settings
        self.__executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="firebase-auth")
        self.__transport = transport
        self.current_user: AnonymousSession | None = None

    def sign_in_anonymously(self, completion: SignInCompletion) -> Future:
        return self.__executor.submit(self.__sign_in, completion)

    def __sign_in(self, completion: SignInCompletion) -> None:
        try:
            session = self.__request_session()
        except SignInError as e:
            logger.debug(f"Anonymous sign-in failed: {e.message}")
            completion(None, e)
            return

        self.current_user = session
        logger.info(f"Signed in anonymously as {session.uid}")

        completion(session, None)

    def __request_session(self) -> AnonymousSession:
        try:
            return self.__post_sign_up()
        except SignInError:
            raise
        except Exception as e:
            raise SignInError(f"Sign-in failed: {e!r}") from e

    def __post_sign_up(self) -> AnonymousSession:
        try:
            with httpx.Client(timeout=self.__settings.HTTP_TIMEOUT, transport=self.__transport) as c:
                r = c.post(
                    self.__settings.IDENTITY_TOOLKIT_URL,
                    params={"key": self.__settings.FIREBASE_API_KEY},
                    json={"returnSecureToken": True},
                )
        except httpx.HTTPError as e:
            raise SignInError(f"Sign-in request failed: {e}") from e

        try:
            payload = r.json()
        except ValueError:
            payload = {}

        if r.status_code >= 400:
            error = payload.get("error") if isinstance(payload, dict) else None
            message = error.get("message") if isinstance(error, dict) else None

            raise SignInError(
                message or f"Sign-in rejected with status {r.status_code}",
                details={"status_code": r.status_code, "body": r.text}
            )

        id_token = payload.get("idToken") if isinstance(payload, dict) else None

        if not id_token:
            raise SignInError("Sign-in response carried no idToken", details={"body": r.text})

        return self.__build_session(payload)

    def __build_session(self, payload: dict) -> AnonymousSession:
        id_token = payload["idToken"]

        try:
            claims = jwt.get_unverified_claims(id_token)
        except JOSEError:
            claims = {}

        uid = claims.get("user_id") or claims.get("sub") or payload.get("localId")

        if not uid:
            raise SignInError("Sign-in response carried no user id")

        expires_at = claims.get("exp") or time.time() + int(payload.get("expiresIn", 3600))

        return AnonymousSession(
            uid=uid,
            id_token=id_token,
            refresh_token=payload.get("refreshToken"),
            expires_at=float(expires_at),
        )
