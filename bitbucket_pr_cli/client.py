"""Thin wrapper around the Bitbucket Cloud REST API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .exceptions import ApiError
from .models import Config

logger = logging.getLogger(__name__)


class BitbucketClient:
    """HTTP client preconfigured with the base URL and Basic auth.

    Paths are resolved against ``base_url``; absolute URLs (pagination cursors)
    are used as-is. Every failure surfaces as :class:`ApiError`.
    """

    def __init__(
        self,
        username: str,
        password: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (username, password)
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    @classmethod
    def from_config(cls, config: Config, *, base_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT) -> "BitbucketClient":
        return cls(config.username, config.password, base_url=base_url, timeout=timeout)

    def url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self.url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            error = ApiError.from_exception(exc)
            logger.warning("%s %s failed: %s", method, url, error)
            raise error from exc
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON in response from {url}", status_code=response.status_code) from exc
