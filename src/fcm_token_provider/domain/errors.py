from typing import Any


class TokenProviderError(Exception):
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}

        super().__init__(message)


class SignInError(TokenProviderError):
    """Anonymous sign-in was rejected or could not be reached."""


class TokenRequestError(TokenProviderError):
    """The token-issuing callable failed."""


class NoResultError(TokenRequestError):
    def __init__(self, message: str = "Result found nil", details: dict[str, Any] | None = None):
        super().__init__(message, details)

