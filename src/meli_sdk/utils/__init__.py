"""Utility modules for MercadoLibre API operations."""

from .rate_limiter import RateLimitObserver, SlidingWindowRateLimiter
from .validators import (
    validate_non_empty_string,
    validate_positive_integer,
    validate_site_id,
    validate_url,
)

__all__ = [
    "RateLimitObserver",
    "SlidingWindowRateLimiter",
    "validate_non_empty_string",
    "validate_positive_integer",
    "validate_site_id",
    "validate_url",
]
