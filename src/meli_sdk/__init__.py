"""Python client for the MercadoLibre marketplace API.

Includes OAuth2 token exchange and refresh, GET/POST/PUT/DELETE/OPTIONS
passthroughs, and a sliding-window rate limiter that throttles outgoing
calls to stay under a requests-per-window budget.
"""

from .api import MeliClient, RateLimitedGateway, RateLimitedMeliClient, RequestSender, Transport
from .config import Credentials, TransportConfig, rate_limit_from_env
from .constants import SDK_VERSION
from .exceptions import InvalidArgumentError, InvalidConfigurationError, MeliSDKError
from .utils import SlidingWindowRateLimiter

__version__ = SDK_VERSION

__all__ = [
    "Credentials",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "MeliClient",
    "MeliSDKError",
    "RateLimitedGateway",
    "RateLimitedMeliClient",
    "RequestSender",
    "SlidingWindowRateLimiter",
    "Transport",
    "TransportConfig",
    "rate_limit_from_env",
]
