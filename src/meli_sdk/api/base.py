"""Base API client for MercadoLibre API interactions."""

import logging
from typing import Any, Optional, Protocol, runtime_checkable
from urllib.parse import urlencode

from ..constants import API_ROOT_URL

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestSender(Protocol):
    """Anything that can perform one HTTP request.

    Both ``Transport`` and ``RateLimitedGateway`` satisfy this, so a client
    can be handed either one.
    """

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        assoc: bool = False,
    ) -> dict[str, Any]:
        ...


class BaseAPIClient:
    """Builds URLs and funnels every HTTP verb through a single sender."""

    def __init__(self, sender: RequestSender, api_root: str = API_ROOT_URL) -> None:
        """Initialize the base API client.

        Args:
            sender: Object performing the HTTP requests
            api_root: Base URL prepended to every path
        """
        self.sender = sender
        self.api_root = api_root.rstrip("/")

    def make_path(self, path: str, params: Optional[dict[str, Any]] = None) -> str:
        """Build the absolute URL for an API path.

        Args:
            path: API path, with or without a leading slash
            params: Optional query parameters

        Returns:
            Absolute URL including the encoded query string
        """
        if not path.startswith("/"):
            path = "/" + path

        uri = f"{self.api_root}{path}"
        if params:
            uri = f"{uri}?{urlencode(params, doseq=True)}"

        return uri

    def execute(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
        assoc: bool = False,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Send a request through the configured sender.

        Args:
            path: API path (without base URL)
            method: HTTP method
            body: Request body; dicts and lists are sent as JSON
            params: Query parameters
            assoc: Decode JSON objects to dicts instead of attribute objects
            headers: Extra request headers

        Returns:
            Dict with http_code, body and, on failure, error
        """
        url = self.make_path(path, params)
        logger.debug(f"Executing {method} {url}")
        return self.sender.send(method, url, headers=headers, body=body, assoc=assoc)

    def get(self, path: str, params: Optional[dict[str, Any]] = None, assoc: bool = False) -> dict[str, Any]:
        """Execute a GET request."""
        return self.execute(path, "GET", params=params, assoc=assoc)

    def post(self, path: str, body: Any = None, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Execute a POST request with a JSON body."""
        return self.execute(path, "POST", body=body, params=params)

    def put(self, path: str, body: Any = None, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Execute a PUT request with a JSON body."""
        return self.execute(path, "PUT", body=body, params=params)

    def delete(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Execute a DELETE request."""
        return self.execute(path, "DELETE", params=params)

    def options(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Execute an OPTIONS request."""
        return self.execute(path, "OPTIONS", params=params)

    def close(self) -> None:
        """Release the sender's resources if it holds any."""
        close = getattr(self.sender, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "BaseAPIClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
