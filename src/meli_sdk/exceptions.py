"""Common exceptions for the meli-sdk package."""

from typing import Optional


class MeliSDKError(Exception):
    """Base class for errors raised by the SDK itself."""


class InvalidConfigurationError(MeliSDKError, ValueError):
    """Raised when a rate limit or transport setting is out of range."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidArgumentError(MeliSDKError, ValueError):
    """Raised when a caller passes an unusable argument."""

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.argument = argument
