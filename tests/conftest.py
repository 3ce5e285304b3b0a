"""
Shared fixtures for the token provider tests.

Provides:
- Environment for Settings (no .env needed)
- Synchronous fakes for the sign-in backend and the token issuer
- A TokenCache wired to an in-memory repository
"""

import os

os.environ.setdefault("DEVICE_ID", "device-test-001")
os.environ.setdefault("FIREBASE_API_KEY", "test-api-key")
os.environ.setdefault("FIREBASE_PROJECT_ID", "demo-project")
os.environ.setdefault("STORE_BACKEND", "memory")

import httpx
import json
import pytest

from jose import jwt

from fcm_token_provider.application.events import EventBus
from fcm_token_provider.application.services.token_cache import TokenCache
from fcm_token_provider.infra.persistence.token_repository_memory import MemoryTokenRepository

DEVICE_ID = "device-test-001"

VALID_RECORD = {"accessToken": "abc123", "expireTime": "2099-01-01T00:00:00+0000"}
EXPIRED_RECORD = {"accessToken": "abc123", "expireTime": "2000-01-01T00:00:00+0000"}

ID_TOKEN = jwt.encode({"user_id": "anon-uid", "exp": 4102444800}, "secret", algorithm="HS256")


def sign_up_handler(request: httpx.Request) -> httpx.Response:
    assert request.url.params["key"] == "test-api-key"
    assert json.loads(request.content) == {"returnSecureToken": True}

    return httpx.Response(200, json={
        "idToken": ID_TOKEN,
        "refreshToken": "refresh-1",
        "expiresIn": "3600",
        "localId": "anon-uid",
    })


class FakeAuth:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = 0

    def sign_in_anonymously(self, completion):
        self.calls += 1

        if self.error is not None:
            completion(None, self.error)
        else:
            completion({"uid": "anon-uid"}, None)


class FakeIssuer:
    def __init__(self, error: Exception | None = None, result=None):
        self.error = error
        self.result = result if result is not None else {"accepted": True}
        self.calls = []

    def call(self, name, data, completion):
        self.calls.append((name, data))

        if self.error is not None:
            completion(None, self.error)
        else:
            completion(self.result, None)


class RecordingCallback:
    def __init__(self):
        self.calls = []

    def __call__(self, token, error):
        self.calls.append((token, error))


@pytest.fixture
def repository():
    return MemoryTokenRepository()


@pytest.fixture
def auth():
    return FakeAuth()


@pytest.fixture
def issuer():
    return FakeIssuer()


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def cache(repository, auth, issuer, events):
    return TokenCache(DEVICE_ID, repository, auth, issuer, events)


@pytest.fixture
def callback():
    return RecordingCallback()
