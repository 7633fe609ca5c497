import logging
from typing import Any, Optional

import requests

from lucia.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


class HttpClient:
    """Thin JSON-over-HTTP wrapper around a pooled ``requests.Session``."""

    def __init__(self, base_url: str, headers: Optional[dict[str, str]] = None,
                 session: Optional[requests.Session] = None, timeout: float = 5):
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.session.close()

    def get(self, path: str, *, timeout: Optional[float] = None) -> Any:
        return self._decode(self.request("GET", path, timeout=timeout))

    def put(self, path: str, payload: dict, *, timeout: Optional[float] = None) -> str:
        # mutation responses are surfaced raw, callers only need them for diagnostics
        return self.request("PUT", path, payload=payload, timeout=timeout).text

    def post(self, path: str, payload: dict, *, timeout: Optional[float] = None) -> Any:
        return self._decode(self.request("POST", path, payload=payload, timeout=timeout))

    def request(self, method: str, path: str, payload: Optional[dict] = None,
                timeout: Optional[float] = None) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url
        logger.debug("%s %s %s", method, url, payload if payload is not None else "")
        try:
            r = self.session.request(method, url, json=payload, headers=self.headers,
                                     timeout=timeout or self.timeout)
            r.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(f"{method} {url} failed with HTTP {e.response.status_code}") from e
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        return r

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"response from {response.url} is not valid JSON: {response.text[:200]!r}") from e
