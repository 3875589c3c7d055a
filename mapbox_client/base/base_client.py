"""
HTTP base client shared by every Mapbox API module.

Owns the requests session, the access token and the rate limiter, and maps
HTTP failures onto the client error taxonomy. API modules only build paths
and query parameters and parse the JSON they get back.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..config.config_module import (
    BASE_URL_KEY,
    BURST_CAPACITY_KEY,
    RATE_LIMIT_KEY,
    REQUEST_TIMEOUT_KEY,
    TOKEN_KEY,
    get_config,
    get_config_float,
    get_config_int,
)
from ..config.logger_module import log_debug, log_error
from .base_errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    RATE_LIMIT_MESSAGE,
    RateLimitError,
    TransportError,
    UNAUTHORIZED_MESSAGE,
    UnauthorizedError,
)
from .base_rate_limiter import TokenBucketRateLimiter


STATUS_BAD_REQUEST = 400
STATUS_UNAUTHORIZED = 401
STATUS_RATE_LIMIT_EXCEEDED = 429

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_params(values: Mapping[str, Any]) -> Dict[str, str]:
    """
    Encode request options as query parameters.

    None values are omitted, booleans become "true"/"false", enum members
    their values and lists are joined with commas.
    """
    params: Dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            if not value:
                continue
            params[key] = ",".join(_param_value(v) for v in value)
        else:
            params[key] = _param_value(value)
    return params


def _param_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def parse_model(model: Type[ModelT], data: Any) -> ModelT:
    """
    Validate a decoded JSON body into a response model.

    Raises:
        DecodeError: When the payload does not match the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected {model.__name__} payload: {e}") from e


def extract_error_message(response: requests.Response) -> Optional[str]:
    """Extract the ``message`` field of a JSON error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


class BaseClient:
    """
    Authenticated, rate limited access to api.mapbox.com.

    Provides two request primitives:
    1. query_request: raw response (used for tiles)
    2. query_json: decoded JSON body (used by every other API)
    """

    DEFAULT_BASE_URL = "https://api.mapbox.com"
    USER_AGENT = "mapbox-client-python/1.0"

    def __init__(self,
                 token: Optional[str] = None,
                 base_url: Optional[str] = None,
                 request_timeout: Optional[float] = None,
                 rate_limiter: Optional[TokenBucketRateLimiter] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the base client.

        Args:
            token: Mapbox access token (read from MAPBOX_TOKEN if not provided)
            base_url: API root (defaults to MAPBOX_BASE_URL or api.mapbox.com)
            request_timeout: HTTP timeout in seconds
            rate_limiter: Shared limiter; one is built from config if omitted
            session: Pre-configured requests session
        """
        self.token = token or get_config(TOKEN_KEY)
        if not self.token:
            raise ConfigurationError("Mapbox API token not found")

        self.base_url = (base_url or get_config(BASE_URL_KEY, self.DEFAULT_BASE_URL)).rstrip("/")
        self.request_timeout = request_timeout or get_config_float(REQUEST_TIMEOUT_KEY, 30.0)

        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(
            rate_per_second=get_config_float(RATE_LIMIT_KEY, 10.0),
            burst_capacity=get_config_int(BURST_CAPACITY_KEY, 20),
        )

        self._session = session or requests.Session()
        self._session.headers.update({
            'User-Agent': self.USER_AGENT
        })
        self.debug = False

    def set_debug(self, debug: bool) -> None:
        """Log every request URL and response status at debug level."""
        self.debug = debug

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._session.close()

    def __enter__(self) -> "BaseClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def query_request(self, path: str, params: Optional[Mapping[str, Any]] = None) -> requests.Response:
        """
        GET ``{base_url}/{path}`` with the access token attached.

        Returns the response for any status other than 401 and 429.

        Raises:
            TransportError: On connection failures and timeouts
            RateLimitError: On HTTP 429 or local throttling exhaustion
            UnauthorizedError: On HTTP 401
        """
        query = dict(params or {})
        query["access_token"] = self.token
        url = f"{self.base_url}/{path}"

        self.rate_limiter.wait_for_token()

        if self.debug:
            log_debug(f"GET {url}")

        try:
            response = self._session.get(url, params=query, timeout=self.request_timeout)
        except requests.exceptions.Timeout as e:
            log_error(f"Timeout requesting {path}")
            raise TransportError(f"Request timeout ({path})") from e
        except requests.exceptions.RequestException as e:
            log_error(f"Request error for {path}: {e}")
            raise TransportError(f"Request failed: {e}") from e

        if self.debug:
            log_debug(f"Response {response.status_code} for {path}")

        if response.status_code == STATUS_RATE_LIMIT_EXCEEDED:
            raise RateLimitError(RATE_LIMIT_MESSAGE)
        if response.status_code == STATUS_UNAUTHORIZED:
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)

        return response

    def query_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        GET ``path`` and decode the JSON body.

        Raises:
            APIError: On HTTP 400, carrying the service message
            TransportError: On any other non-2xx status
            DecodeError: When the body is not valid JSON
        """
        response = self.query_request(path, params)

        if response.status_code == STATUS_BAD_REQUEST:
            message = extract_error_message(response)
            if message:
                raise APIError(f"api error: {message}")
            raise APIError("Bad Request (400) - no message")

        if not 200 <= response.status_code < 300:
            raise TransportError(f"HTTP {response.status_code} requesting {path}")

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON response for {path}: {e}") from e

    def query(self,
              api: str,
              version: str,
              mode: str,
              query: str,
              params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Query ``{api}/{version}/{mode}/{query}`` and return the decoded JSON."""
        return self.query_json(f"{api}/{version}/{mode}/{query}", params)
