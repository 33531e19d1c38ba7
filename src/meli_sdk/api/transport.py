"""HTTP transport performing single requests against the MercadoLibre API."""

import json
import logging
import uuid
from datetime import datetime
from types import SimpleNamespace
from typing import Any, Optional

import requests

from ..config import TransportConfig
from ..constants import RESPONSE_PREVIEW_LENGTH

logger = logging.getLogger(__name__)


class Transport:
    """Sends one HTTP request and reports the outcome as a response dict.

    Network and decoding failures never raise. They come back in the
    ``error`` key with ``http_code`` set to whatever status was received
    (0 when none was).
    """

    def __init__(self, config: Optional[TransportConfig] = None, session: Optional[requests.Session] = None) -> None:
        """Initialize the transport.

        Args:
            config: Connection options; defaults to TransportConfig()
            session: Session to reuse; a new one is created when omitted
        """
        self.config = config or TransportConfig()
        # One session per transport keeps TCP/TLS connections pooled
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "application/json",
            }
        )

    def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        assoc: bool = False,
    ) -> dict[str, Any]:
        """Perform the request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute URL
            headers: Extra request headers
            body: Dicts and lists are sent as JSON; str and bytes as-is
            assoc: Decode JSON objects to dicts instead of attribute objects

        Returns:
            Dict with http_code, body and, on failure, error
        """
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        logger.info(f"Request {request_id}: Starting {method} {url}")

        request_kwargs: dict[str, Any] = {
            "headers": headers or {},
            "timeout": self.config.timeouts,
            "verify": self.config.verify_ssl,
        }
        if isinstance(body, (dict, list)):
            request_kwargs["json"] = body
        elif body is not None:
            request_kwargs["data"] = body

        try:
            response = self.session.request(method, url, **request_kwargs)
        except requests.RequestException as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            status_code = e.response.status_code if e.response is not None else 0
            logger.error(f"Request {request_id}: {type(e).__name__} in {duration_ms}ms: {e}")

            return {
                "http_code": status_code,
                "body": None,
                "error": f"Request error ({type(e).__name__}): {e}",
            }

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.info(f"Request {request_id}: Completed in {duration_ms}ms, status={response.status_code}")

        return self._decode(request_id, response, assoc)

    def _decode(self, request_id: str, response: requests.Response, assoc: bool) -> dict[str, Any]:
        text = response.text
        if not text.strip():
            return {"http_code": response.status_code, "body": None}

        try:
            if assoc:
                decoded = json.loads(text)
            else:
                decoded = json.loads(text, object_hook=lambda obj: SimpleNamespace(**obj))
        except json.JSONDecodeError as e:
            logger.warning(
                f"Request {request_id}: JSON decode error: {e}. "
                f"Response preview: {text[:RESPONSE_PREVIEW_LENGTH]}"
            )
            return {
                "http_code": response.status_code,
                "body": text,
                "error": f"JSON decode error: {e}",
            }

        return {"http_code": response.status_code, "body": decoded}

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
