"""The one HTTP collaborator every tool goes through.

`make_wordpress_request(method, path, data)` sends a single request to
`<site_url>/wp-json/<path>` and returns the decoded body, or raises
`UpstreamError` / `TransportError` from `core.errors`.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from core.config import get_config  # type: ignore
from core.errors import TransportError, UpstreamError  # type: ignore
from utils.endpoints import get_api_root  # type: ignore
from utils.response_utils import robust_parse_text  # type: ignore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
QUERY_METHODS = ("GET", "DELETE")


class WordPressClient:
    def __init__(
        self,
        api_root: str,
        username: Optional[str] = None,
        app_password: Optional[str] = None,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_root = api_root.rstrip("/")
        self.username = username
        self.app_password = app_password
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Optional[dict] = None, **kwargs) -> "WordPressClient":
        cfg = config if config is not None else (get_config() or {})
        wp = cfg.get("wordpress") or {}
        woo = cfg.get("woocommerce") or {}
        http = cfg.get("http") or {}
        return cls(
            api_root=get_api_root(cfg),
            username=wp.get("username") or None,
            app_password=wp.get("app_password") or None,
            consumer_key=woo.get("consumer_key") or None,
            consumer_secret=woo.get("consumer_secret") or None,
            timeout=float(http.get("timeout") or DEFAULT_TIMEOUT),
            **kwargs,
        )

    def auth_for(self, path: str) -> Optional[httpx.Auth]:
        """WooCommerce keys win for wc/ paths; otherwise the application password."""
        if path.startswith("wc/") and self.consumer_key and self.consumer_secret:
            return httpx.BasicAuth(self.consumer_key, self.consumer_secret)
        if self.username and self.app_password:
            return httpx.BasicAuth(self.username, self.app_password)
        return None

    async def request(self, method: str, path: str, data: Optional[dict[str, Any]] = None) -> Any:
        path = path.lstrip("/")
        return await self._send(method, f"{self.api_root}/{path}", data, self.auth_for(path))

    async def fetch(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET an absolute URL off the site (e.g. api.wordpress.org), without credentials."""
        return await self._send("GET", url, params, None)

    async def _send(self, method: str, url: str, data: Optional[dict[str, Any]], auth: Optional[httpx.Auth]) -> Any:
        method = method.upper()
        params = data if method in QUERY_METHODS else None
        body = None if method in QUERY_METHODS else data

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport, follow_redirects=True) as client:
            try:
                response = await client.request(method, url, params=params, json=body, auth=auth)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                logger.warning(f"{method} {url} returned {status}")
                raise UpstreamError(status, robust_parse_text(e.response.text)) from e
            except httpx.RequestError as e:
                logger.warning(f"{method} {url} failed: {e!r}")
                raise TransportError(str(e) or type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Failed to decode JSON from {url}: {e}; returning parsed fallback (raw/ndjson/first-chunk)")
            return robust_parse_text(response.text)


client: Optional[WordPressClient] = None


def set_client(new_client) -> None:
    """Replace the shared client (anything with async `request(method, path, data)` and `fetch(url, params)`)."""
    global client
    client = new_client


def get_client():
    global client
    if client is None:
        client = WordPressClient.from_config()
    return client


async def make_wordpress_request(method: str, path: str, data: Optional[dict[str, Any]] = None) -> Any:
    return await get_client().request(method, path, data)


async def make_external_request(url: str, params: Optional[dict[str, Any]] = None) -> Any:
    return await get_client().fetch(url, params)
