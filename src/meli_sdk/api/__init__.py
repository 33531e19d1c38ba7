"""MercadoLibre API client modules."""

from .base import BaseAPIClient, RequestSender
from .client import MeliClient, RateLimitedMeliClient
from .gateway import RateLimitedGateway
from .transport import Transport

__all__ = [
    "BaseAPIClient",
    "MeliClient",
    "RateLimitedGateway",
    "RateLimitedMeliClient",
    "RequestSender",
    "Transport",
]
