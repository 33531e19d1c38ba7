"""MercadoLibre API clients with OAuth2 token handling."""

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from ..config import Credentials, TransportConfig
from ..constants import (
    API_ROOT_URL,
    AUTH_URLS,
    OAUTH_URL,
)
from ..exceptions import InvalidArgumentError
from ..utils.rate_limiter import RateLimitObserver, SlidingWindowRateLimiter
from ..utils.validators import validate_non_empty_string, validate_site_id, validate_url
from .base import BaseAPIClient, RequestSender
from .gateway import RateLimitedGateway
from .transport import Transport

logger = logging.getLogger(__name__)


class MeliClient(BaseAPIClient):
    """Client for the MercadoLibre API: OAuth handshake plus verb passthroughs."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        sender: Optional[RequestSender] = None,
        config: Optional[TransportConfig] = None,
        api_root: str = API_ROOT_URL,
    ) -> None:
        """Initialize the client.

        Args:
            client_id: Application ID
            client_secret: Application secret key
            access_token: Previously issued access token
            refresh_token: Previously issued refresh token (offline access)
            sender: Request sender; a Transport built from config when omitted
            config: Connection options for the default Transport
            api_root: Base URL of the API

        Raises:
            InvalidArgumentError: If client_id or client_secret is empty
        """
        self._check_app_credentials(client_id, client_secret)
        super().__init__(sender or Transport(config), api_root=api_root)

        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.redirect_uri: Optional[str] = None

    @staticmethod
    def _check_app_credentials(client_id: Any, client_secret: Any) -> None:
        if not validate_non_empty_string(client_id):
            raise InvalidArgumentError("client_id must be a non-empty string", argument="client_id")
        if not validate_non_empty_string(client_secret):
            raise InvalidArgumentError("client_secret must be a non-empty string", argument="client_secret")

    @classmethod
    def from_credentials(cls, credentials: Credentials, **kwargs: Any) -> "MeliClient":
        """Build a client from a Credentials value (see Credentials.from_env)."""
        return cls(
            credentials.client_id,
            credentials.client_secret,
            access_token=credentials.access_token,
            refresh_token=credentials.refresh_token,
            **kwargs,
        )

    def get_auth_url(self, redirect_uri: str, auth_url: str) -> str:
        """Return the login URL the user must visit to authorize the app.

        Args:
            redirect_uri: Where MercadoLibre sends the user back with a code
            auth_url: Login host, or a site ID such as "MLB"

        Returns:
            Complete authorization URL

        Raises:
            InvalidArgumentError: If redirect_uri is not a URL or auth_url is empty
        """
        if not validate_url(redirect_uri):
            raise InvalidArgumentError("redirect_uri must be a valid URL", argument="redirect_uri")
        if not validate_non_empty_string(auth_url):
            raise InvalidArgumentError("auth_url must be a non-empty string", argument="auth_url")

        if validate_site_id(auth_url):
            auth_url = AUTH_URLS[auth_url]

        self.redirect_uri = redirect_uri
        params = {"client_id": self.client_id, "response_type": "code", "redirect_uri": redirect_uri}
        return f"{auth_url.rstrip('/')}/authorization?{urlencode(params)}"

    def authorize(self, code: str, redirect_uri: Optional[str] = None) -> dict[str, Any]:
        """Exchange an authorization code for tokens.

        On HTTP 200 the access token (and refresh token, if issued) are stored
        on the client. The response is returned either way.

        Args:
            code: Authorization code received on the redirect URI
            redirect_uri: Redirect URI used to obtain the code

        Raises:
            InvalidArgumentError: If code is empty or redirect_uri is not a URL
        """
        if not validate_non_empty_string(code):
            raise InvalidArgumentError(
                "Authorization code is required and must be a non-empty string", argument="code"
            )
        if redirect_uri and not validate_url(redirect_uri):
            raise InvalidArgumentError("redirect_uri must be a valid URL", argument="redirect_uri")

        if redirect_uri:
            self.redirect_uri = redirect_uri

        body = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }
        return self._request_token(body)

    def refresh_access_token(self) -> dict[str, Any]:
        """Obtain a new access token using the stored refresh token.

        Returns:
            The token response, or an error dict when no refresh token is held
        """
        if not self.refresh_token:
            return {"error": "Offline-Access is not allowed.", "http_code": None}

        body = {
            "grant_type": "refresh_token",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": self.refresh_token,
        }
        return self._request_token(body)

    def execute(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
        assoc: bool = False,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Send a request, adding the bearer token once one has been issued."""
        headers = dict(headers or {})
        if self.access_token and path != OAUTH_URL and "Authorization" not in headers:
            headers["Authorization"] = f"Bearer {self.access_token}"

        return super().execute(path, method, body=body, params=params, assoc=assoc, headers=headers or None)

    def _request_token(self, form: dict[str, Any]) -> dict[str, Any]:
        # Form-encoded body, as the token endpoint expects
        response = self.execute(
            OAUTH_URL,
            "POST",
            body=urlencode({key: value for key, value in form.items() if value is not None}),
            assoc=True,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        if response.get("http_code") == 200 and isinstance(response.get("body"), dict):
            token_data = response["body"]
            self.access_token = token_data.get("access_token")
            if token_data.get("refresh_token"):
                self.refresh_token = token_data["refresh_token"]
            logger.info(f"OAuth {form['grant_type']} exchange succeeded")
        else:
            logger.warning(
                f"OAuth {form['grant_type']} exchange failed: status={response.get('http_code')}, "
                f"error={response.get('error')}"
            )

        return response


class RateLimitedMeliClient(MeliClient):
    """MeliClient whose requests, OAuth included, pass through a RateLimitedGateway.

    Usage::

        meli = RateLimitedMeliClient("app_id", "secret")
        meli.set_rate_limit(50, 60)
        for _ in range(100):
            meli.get("/items/MLB123")  # throttles after 50 calls
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        on_rate_limit: Optional[RateLimitObserver] = None,
        transport: Optional[RequestSender] = None,
        config: Optional[TransportConfig] = None,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        api_root: str = API_ROOT_URL,
    ) -> None:
        """Initialize the client.

        Args:
            client_id: Application ID
            client_secret: Application secret key
            access_token: Previously issued access token
            refresh_token: Previously issued refresh token
            max_requests: Maximum requests per window (50 unless given)
            window_seconds: Window length in seconds (60 unless given)
            on_rate_limit: Observer called with (wait_seconds, count, max_requests)
            transport: Sender wrapped by the gateway; a Transport when omitted
            config: Connection options for the default Transport
            rate_limiter: Preconfigured limiter; its budget is kept unless
                max_requests or window_seconds is given
            api_root: Base URL of the API
        """
        self._check_app_credentials(client_id, client_secret)

        limiter = rate_limiter or SlidingWindowRateLimiter()
        if max_requests is not None or window_seconds is not None:
            limiter.configure(
                max_requests if max_requests is not None else limiter.max_requests,
                window_seconds if window_seconds is not None else limiter.window_seconds,
            )
        if on_rate_limit is not None:
            limiter.set_observer(on_rate_limit)

        self.gateway = RateLimitedGateway(transport or Transport(config), rate_limiter=limiter)
        super().__init__(
            client_id,
            client_secret,
            access_token=access_token,
            refresh_token=refresh_token,
            sender=self.gateway,
            api_root=api_root,
        )

    def set_rate_limit(self, max_requests: int, window_seconds: int) -> None:
        """Configure rate limiting, e.g. ``set_rate_limit(300, 60)`` for production."""
        self.gateway.configure(max_requests, window_seconds)

    def enable_rate_limit(self) -> None:
        self.gateway.enable()

    def disable_rate_limit(self) -> None:
        """Disable rate limiting (use with caution in production)."""
        self.gateway.disable()

    def set_on_rate_limit_callback(self, callback: RateLimitObserver) -> None:
        self.gateway.set_observer(callback)

    def get_rate_limit_stats(self) -> dict[str, Any]:
        return self.gateway.stats()

    def reset_rate_limit(self) -> None:
        self.gateway.reset()
