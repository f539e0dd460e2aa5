from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from cbc_streamlink.errors import SchemaError, UpstreamError


class FakeHttpClient:
    """Serves canned bodies keyed by URL and records every request."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None) -> None:
        self.responses: Dict[str, Any] = dict(responses or {})
        self.requests: List[Tuple[str, str, Optional[Dict[str, Any]], Optional[str]]] = []

    def _lookup(self, method: str, url: str, params=None, referer=None) -> Any:
        self.requests.append((method, url, params, referer))
        if url not in self.responses:
            raise UpstreamError(f"{url} answered with HTTP 404")
        body = self.responses[url]
        if isinstance(body, Exception):
            raise body
        return body

    def get_text(self, url, params=None, referer=None) -> str:
        body = self._lookup("GET", url, params, referer)
        return body if isinstance(body, str) else json.dumps(body)

    def get_json(self, url, params=None, referer=None) -> Any:
        body = self._lookup("GET", url, params, referer)
        if isinstance(body, str):
            try:
                return json.loads(body)
            except ValueError as exc:
                raise SchemaError(f"{url} did not return valid JSON") from exc
        return body

    def post_json(self, url, payload) -> Any:
        self.requests.append(("POST", url, payload, None))
        body = self.responses[url]
        if isinstance(body, Exception):
            raise body
        return body

    def close(self) -> None:
        pass

    def __enter__(self) -> "FakeHttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


def watch_page(state: Dict[str, Any]) -> str:
    return (
        "<html><head><script>var config = {\"a\": {\"b\": 1}};</script>"
        "<script>window.__INITIAL_STATE__ = "
        + json.dumps(state)
        + ";</script></head><body><div>{not json}</div></body></html>"
    )


def olympics_page(state: Dict[str, Any]) -> str:
    return (
        "<html><body><script id=\"initialStateDom\">window.__INITIAL_STATE__ = "
        + json.dumps(state)
        + ";</script></body></html>"
    )


SMIL_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<smil xmlns="http://www.w3.org/2005/SMIL21/Language">
  <head><meta base="https://cdn/"/></head>
  <body>
    <seq>
      <video src="https://cdn/master.m3u8" title="Event" abstract=""/>
    </seq>
  </body>
</smil>
"""

MASTER_PLAYLIST = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-STREAM-INF:BANDWIDTH=800000,RESOLUTION=640x360,CODECS="avc1.4d401e,mp4a.40.2"
low/index.m3u8?token=abc
#EXT-X-STREAM-INF:BANDWIDTH=3000000,RESOLUTION=1280x720,CODECS="avc1.4d401f,mp4a.40.2"
high/index.m3u8?token=abc
#EXT-X-STREAM-INF:BANDWIDTH=1200000,RESOLUTION=960x540,CODECS="avc1.4d401f,mp4a.40.2"
mid/index.m3u8?token=abc
"""
