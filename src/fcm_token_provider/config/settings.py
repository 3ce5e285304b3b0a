from pathlib import Path
from pydantic import StringConstraints
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict
)
from typing import (
    Annotated,
    Literal
)

ROOT = Path(__file__).resolve().parents[3]
ENV_PATH = ROOT / ".env"
STORE_PATH = ROOT / ".token_store.json"


class Settings(BaseSettings):
    DEVICE_ID          : Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    FIREBASE_API_KEY   : Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    FIREBASE_PROJECT_ID: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

    FUNCTIONS_REGION  : str = "us-central1"
    FUNCTIONS_BASE_URL: str | None = None

    IDENTITY_TOOLKIT_URL: str = "https://identitytoolkit.googleapis.com/v1/accounts:signUp"

    STORE_BACKEND: Literal["file", "memory"] = "file"
    STORE_PATH   : str = str(STORE_PATH)

    HTTP_TIMEOUT: float = 20.0

    SERVICE_NAME: str = "fcm-token-provider"
    LOG_LEVEL   : str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
    )

    @property
    def functions_url(self) -> str:
        if self.FUNCTIONS_BASE_URL:
            return self.FUNCTIONS_BASE_URL.rstrip("/")

        return f"https://{self.FUNCTIONS_REGION}-{self.FIREBASE_PROJECT_ID}.cloudfunctions.net"
