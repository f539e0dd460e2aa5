"""Shared HTTP helpers for CBC APIs, watch pages and manifests."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..errors import SchemaError, UpstreamError
from .proxy import for_transport

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "*/*",
    "accept-language": "en-CA,en;q=0.9",
}


class HttpClient:
    """Issues blocking requests with the browser user agent and optional proxy."""

    def __init__(self, proxy: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(DEFAULT_HEADERS.copy())
        if proxy:
            # requests resolves hostnames locally for socks5://, only socks5h:// resolves through the proxy
            transport_proxy = for_transport(proxy)
            self._session.proxies.update({"http": transport_proxy, "https": transport_proxy})
            logging.debug("Routing requests through %s", transport_proxy)

    def get_text(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        referer: Optional[str] = None,
    ) -> str:
        """GET a document (HTML, SMIL, m3u8) and return its body."""

        return self._send("GET", url, params=params, referer=referer).text

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        referer: Optional[str] = None,
    ) -> Any:
        response = self._send("GET", url, params=params, referer=referer)
        return self._decode(response)

    def post_json(self, url: str, payload: Dict[str, Any]) -> Any:
        """POST a JSON body (GraphQL) and decode the JSON reply."""

        response = self._send("POST", url, json=payload)
        return self._decode(response)

    def _send(
        self,
        method: str,
        url: str,
        referer: Optional[str] = None,
        **kwargs: Any,
    ) -> requests.Response:
        headers = {"referer": referer} if referer else None
        try:
            response = self._session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logging.error("HTTP %s to %s failed: %s", method, url, exc)
            raise UpstreamError(f"request to {url} failed: {exc}") from exc

        if not response.ok:
            logging.error("HTTP %s to %s returned status %s", method, url, response.status_code)
            raise UpstreamError(f"{url} answered with HTTP {response.status_code}")
        return response

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logging.debug("Undecodable body from %s: %.200s", response.url, response.text)
            raise SchemaError(f"{response.url} did not return valid JSON") from exc

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
