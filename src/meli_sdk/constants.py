"""Constants and configuration for the MercadoLibre API."""

SDK_VERSION = "2.1.0"

API_ROOT_URL = "https://api.mercadolibre.com"
OAUTH_URL = "/oauth/token"

# Login pages by site ID
AUTH_URLS = {
    "MLA": "https://auth.mercadolibre.com.ar",  # Argentina
    "MLB": "https://auth.mercadolivre.com.br",  # Brasil
    "MCO": "https://auth.mercadolibre.com.co",  # Colombia
    "MCR": "https://auth.mercadolibre.com.cr",  # Costa Rica
    "MEC": "https://auth.mercadolibre.com.ec",  # Ecuador
    "MLC": "https://auth.mercadolibre.cl",  # Chile
    "MLM": "https://auth.mercadolibre.com.mx",  # Mexico
    "MLU": "https://auth.mercadolibre.com.uy",  # Uruguay
    "MLV": "https://auth.mercadolibre.com.ve",  # Venezuela
    "MPA": "https://auth.mercadolibre.com.pa",  # Panama
    "MPE": "https://auth.mercadolibre.com.pe",  # Peru
    "MPT": "https://auth.mercadolibre.com.pt",  # Portugal
    "MRD": "https://auth.mercadolibre.com.do",  # Dominicana
    "CBT": "https://global-selling.mercadolibre.com",  # Cross-border trade
}

# Transport defaults (seconds)
DEFAULT_USER_AGENT = f"MELI-PYTHON-SDK-{SDK_VERSION}"
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_TIMEOUT = 60

# Default rate limit (requests per window, window in seconds)
DEFAULT_MAX_REQUESTS = 50
DEFAULT_WINDOW_SECONDS = 60

# Extra wait added after the window clears, covering second-granularity clocks
DEFAULT_SAFETY_MARGIN = 1.0

# Characters of an undecodable body kept in log messages
RESPONSE_PREVIEW_LENGTH = 200

# Environment variables read by config.py
ENV_CLIENT_ID = "MELI_CLIENT_ID"
ENV_CLIENT_SECRET = "MELI_CLIENT_SECRET"
ENV_ACCESS_TOKEN = "MELI_ACCESS_TOKEN"
ENV_REFRESH_TOKEN = "MELI_REFRESH_TOKEN"
ENV_RATE_LIMIT_MAX_REQUESTS = "MELI_RATE_LIMIT_MAX_REQUESTS"
ENV_RATE_LIMIT_WINDOW_SECONDS = "MELI_RATE_LIMIT_WINDOW_SECONDS"
