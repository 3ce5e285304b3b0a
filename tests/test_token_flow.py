"""End-to-end refresh through the thread-pool Firebase clients and TokenService."""

import httpx
import json
import pytest
import threading

from fastapi import HTTPException

from conftest import (
    DEVICE_ID,
    ID_TOKEN,
    VALID_RECORD,
    sign_up_handler
)
from fcm_token_provider.application.services.token_cache import TokenCache
from fcm_token_provider.application.services.token_service import TokenService
from fcm_token_provider.config.settings import Settings
from fcm_token_provider.infra.client.firebase_auth import FirebaseAuthClient
from fcm_token_provider.infra.client.firebase_functions import FirebaseFunctionsClient
from fcm_token_provider.infra.persistence.token_repository_memory import MemoryTokenRepository


class CallableBackend:
    def __init__(self):
        self.requests = []
        self.threads = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.threads.append(threading.current_thread())
        self.requests.append({
            "url": str(request.url),
            "auth": request.headers.get("authorization"),
            "body": json.loads(request.content),
        })

        return httpx.Response(200, json={"result": {"status": "queued"}})


@pytest.fixture
def settings():
    return Settings(FUNCTIONS_BASE_URL="http://functions.test")


def build_service(settings, auth_handler, backend):
    repository = MemoryTokenRepository()
    auth = FirebaseAuthClient(settings, transport=httpx.MockTransport(auth_handler))
    issuer = FirebaseFunctionsClient(settings, auth, transport=httpx.MockTransport(backend))
    cache = TokenCache(DEVICE_ID, repository, auth, issuer)

    return TokenService(cache), cache


def test_refresh_runs_on_worker_threads(settings):
    backend = CallableBackend()
    service, _ = build_service(settings, sign_up_handler, backend)

    result = service.get_token()

    assert result == {"token": None, "detail": "No token is available"}
    assert backend.requests == [{
        "url": "http://functions.test/getOAuthToken",
        "auth": f"Bearer {ID_TOKEN}",
        "body": {"data": {"deviceID": DEVICE_ID}},
    }]
    assert backend.threads[0] is not threading.current_thread()


def test_delivered_token_is_served_after_refresh(settings):
    backend = CallableBackend()
    service, cache = build_service(settings, sign_up_handler, backend)

    service.get_token()
    cache.token_from_app_delegate(VALID_RECORD)

    assert service.get_token() == {"token": "Bearer abc123"}
    assert len(backend.requests) == 1


def test_malformed_sign_up_fails_request_instead_of_hanging(settings):
    backend = CallableBackend()
    service, _ = build_service(
        settings,
        lambda request: httpx.Response(200, json={"idToken": "opaque", "localId": "anon", "expiresIn": "soon"}),
        backend
    )

    with pytest.raises(HTTPException) as exc_info:
        service.get_token()

    assert exc_info.value.status_code == 401
    assert backend.requests == []
