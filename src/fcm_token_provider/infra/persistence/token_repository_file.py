import json
import logging

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fcm_token_provider.domain.models.token import TOKEN_KEY
from fcm_token_provider.domain.repository.token_repository import TokenRepository

logger = logging.getLogger(__name__)


class FileTokenRepository(TokenRepository):
    """Token map kept in a JSON file shared with other keys."""

    def __init__(self, path: str, key: str = TOKEN_KEY):
        self.path = Path(path)

        super().__init__(key)

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token store at {self.path}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8"
        )

    def get(self) -> dict[str, Any] | None:
        value = self.load().get(self.key)

        return value if isinstance(value, dict) else None

    def set(self, record: Mapping[str, Any]) -> None:
        data = self.load()
        data[self.key] = dict(record)

        self.save(data)

    def clear(self) -> None:
        data = self.load()

        if data.pop(self.key, None) is not None:
            self.save(data)
