from collections.abc import Mapping
from datetime import (
    datetime,
    timezone
)
from pydantic import BaseModel
from typing import Any

TOKEN_KEY        = "Token"
ACCESS_TOKEN_KEY = "accessToken"
EXPIRE_TIME_KEY  = "expireTime"

TOKEN_RECEIVED_EVENT   = "tokenReceived"
RETRIEVING_TOKEN_EVENT = "RetrievingToken"

GET_TOKEN_API = "getOAuthToken"
TOKEN_TYPE    = "Bearer "

NO_TOKEN_MESSAGE = "No token is available"
TOKEN_NOT_FOUND  = "Token is not there in user defaults"

# yyyy-MM-dd'T'HH:mm:ssZ
EXPIRE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_expire_time(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None

    try:
        return datetime.strptime(value, EXPIRE_TIME_FORMAT)
    except ValueError:
        return None


class TokenRecord:
    """Cached token as read back from the store.

    Unreadable fields come back as ``None``; a record without a parseable
    expiry is always expired.
    """

    def __init__(self, access_token: str | None = None, expire_time: datetime | None = None):
        self.access_token = access_token
        self.expire_time  = expire_time

    @classmethod
    def from_mapping(cls, data: Any) -> "TokenRecord":
        if not isinstance(data, Mapping):
            return cls()

        access_token = data.get(ACCESS_TOKEN_KEY)

        return cls(
            access_token=access_token if isinstance(access_token, str) else None,
            expire_time=parse_expire_time(data.get(EXPIRE_TIME_KEY)),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expire_time is None:
            return True

        return (now or datetime.now(timezone.utc)) > self.expire_time

    @property
    def bearer(self) -> str | None:
        if self.access_token is None:
            return None

        return f"{TOKEN_TYPE}{self.access_token}"


class Token(BaseModel):
    access_token: str
