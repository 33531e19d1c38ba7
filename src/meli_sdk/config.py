"""Configuration values for the transport, credentials and rate limits."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_REQUESTS,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    DEFAULT_WINDOW_SECONDS,
    ENV_ACCESS_TOKEN,
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_RATE_LIMIT_MAX_REQUESTS,
    ENV_RATE_LIMIT_WINDOW_SECONDS,
    ENV_REFRESH_TOKEN,
)
from .exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class TransportConfig:
    """Connection options applied to every request a Transport sends."""

    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        for name in ("connect_timeout", "timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise InvalidConfigurationError(f"{name} must be a positive number, got {value!r}", field=name)

    @property
    def timeouts(self) -> tuple[float, float]:
        """(connect, read) timeout pair in the form requests expects."""
        return (self.connect_timeout, self.timeout)


@dataclass
class Credentials:
    """OAuth application credentials and, optionally, issued tokens."""

    client_id: str
    client_secret: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Credentials":
        """Load credentials from the environment (and a .env file if present).

        Raises:
            InvalidConfigurationError: If the client ID or secret is missing
        """
        load_dotenv()

        client_id = os.getenv(ENV_CLIENT_ID)
        client_secret = os.getenv(ENV_CLIENT_SECRET)

        missing = [name for name, value in ((ENV_CLIENT_ID, client_id), (ENV_CLIENT_SECRET, client_secret)) if not value]
        if missing:
            raise InvalidConfigurationError(
                f"Missing required MercadoLibre credentials. Please set {', '.join(missing)} environment variables."
            )

        return cls(
            client_id=str(client_id),
            client_secret=str(client_secret),
            access_token=os.getenv(ENV_ACCESS_TOKEN) or None,
            refresh_token=os.getenv(ENV_REFRESH_TOKEN) or None,
        )


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigurationError(f"{name} must be an integer, got {raw!r}", field=name) from None


def rate_limit_from_env() -> tuple[int, int]:
    """Read the rate limit from the environment.

    Returns:
        Tuple of (max_requests, window_seconds), defaulting to 50 per 60s

    Raises:
        InvalidConfigurationError: If a variable is set but not an integer
    """
    load_dotenv()
    return (
        _int_from_env(ENV_RATE_LIMIT_MAX_REQUESTS, DEFAULT_MAX_REQUESTS),
        _int_from_env(ENV_RATE_LIMIT_WINDOW_SECONDS, DEFAULT_WINDOW_SECONDS),
    )
