from abc import (
    ABC,
    abstractmethod
)
from collections.abc import Mapping
from typing import Any

from fcm_token_provider.domain.models.token import TOKEN_KEY


class TokenRepository(ABC):
    """Key-value storage for the cached token map, bound to a single key."""

    def __init__(self, key: str = TOKEN_KEY):
        self.key = key

    @abstractmethod
    def get(self) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def set(self, record: Mapping[str, Any]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
