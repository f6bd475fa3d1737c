"""
HTTP client for the remote REST backend.

One ApiClient is built when the application starts and handed to every service
that talks to the backend. It holds the base address, the per-request timeout
and the default JSON headers, and wraps a pooled requests.Session.

The client does not retry, cache or translate errors: a transport failure or a
non-2xx status reaches the caller as the requests exception that produced it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from asset_ledger.logger import get_logger
from asset_ledger.utils.logging_sanitizer import sanitize_dict, sanitize_url

logger = get_logger("asset_ledger.api.client")

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass
class ApiResponse:
    """Status and decoded JSON body of one backend response"""
    status_code: int
    data: Any
    url: str


class ApiClient:
    """Configured channel for issuing requests to the backend."""

    def __init__(self, base_url: str, timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 headers: Optional[Dict[str, str]] = None,
                 session: Optional[requests.Session] = None):
        """
        Args:
            base_url: Backend base address; relative paths are resolved against it
            timeout_ms: Timeout applied to every individual request (default: 5000)
            headers: Extra default headers merged over the JSON defaults
            session: Pre-built session (default: a new requests.Session)
        """
        if not base_url:
            raise ValueError("base_url is required")
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

        # urljoin drops the last path segment unless the base ends with a slash
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.timeout_ms = timeout_ms
        self.headers = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)

        self._session = session if session is not None else requests.Session()
        self._session.headers.update(self.headers)

    @property
    def timeout(self) -> float:
        """Per-request timeout in seconds, as requests expects it"""
        return self.timeout_ms / 1000.0

    @property
    def session(self) -> requests.Session:
        return self._session

    def build_url(self, path: str, absolute: bool = False) -> str:
        """
        Resolve a request target.

        Args:
            path: Relative endpoint path such as "assets/" or "assets/4/"
            absolute: Treat path as a complete URL and skip the base address

        Returns:
            The URL the request will be sent to
        """
        if absolute:
            return path
        return urljoin(self.base_url, path.lstrip('/'))

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Any = None, absolute: bool = False) -> ApiResponse:
        """
        Send one request and decode its JSON body.

        Raises:
            requests.ConnectionError, requests.Timeout: transport failures
            requests.HTTPError: the backend answered with a non-2xx status
        """
        url = self.build_url(path, absolute=absolute)

        logger.debug(
            f"{method} {sanitize_url(url)} params={sanitize_dict(params or {})}"
            + (f" body={sanitize_dict(json)}" if isinstance(json, dict) else "")
        )

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.error(f"{method} {sanitize_url(url)} failed with status {status}")
            raise
        except requests.RequestException as e:
            logger.error(f"{method} {sanitize_url(url)} failed: {type(e).__name__}: {e}")
            raise

        data = response.json() if response.content else None
        logger.debug(f"{method} {sanitize_url(url)} -> {response.status_code}")

        return ApiResponse(status_code=response.status_code, data=data, url=response.url or url)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, absolute: bool = False) -> ApiResponse:
        return self.request("GET", path, params=params, absolute=absolute)

    def post(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return self.request("PUT", path, params=params, json=json)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return self.request("DELETE", path, params=params)

    def close(self) -> None:
        """Close the underlying session and release pooled connections."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
