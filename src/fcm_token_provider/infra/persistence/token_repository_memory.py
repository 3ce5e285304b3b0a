from collections.abc import Mapping
from typing import Any

from fcm_token_provider.domain.models.token import TOKEN_KEY
from fcm_token_provider.domain.repository.token_repository import TokenRepository


class MemoryTokenRepository(TokenRepository):
    def __init__(self, key: str = TOKEN_KEY, values: dict[str, Any] | None = None):
        self.__values = values if values is not None else {}

        super().__init__(key)

    def get(self) -> dict[str, Any] | None:
        value = self.__values.get(self.key)

        return dict(value) if isinstance(value, Mapping) else None

    def set(self, record: Mapping[str, Any]) -> None:
        self.__values[self.key] = dict(record)

    def clear(self) -> None:
        self.__values.pop(self.key, None)
