"""Next-stage manifest handling: SMIL documents, stream validation and watch pages."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..errors import SchemaError, UpstreamError
from ..models import AssetDescriptor, MediaAsset, StreamDescriptor, StreamParam
from ..utils.embedded_json import INITIAL_STATE_MARKER, extract_json_object
from ..utils.http_client import HttpClient
from .base import ApiClient, require

MEDIANET_ASSET = "medianet"


def _local_name(element: ET.Element) -> str:
    return element.tag.rsplit("}", 1)[-1]


def parse_smil(document: str) -> StreamDescriptor:
    """Returns the first ``<video src>`` under a ``<seq>`` element, namespaced or not."""

    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise SchemaError(f"SMIL document could not be parsed: {exc}") from exc

    for element in root.iter():
        if _local_name(element) != "seq":
            continue
        for child in element:
            if _local_name(child) == "video":
                src = child.get("src")
                if not src:
                    raise SchemaError("SMIL <video> element has no src attribute")
                return StreamDescriptor(url=src)
    raise SchemaError("SMIL document has no <seq><video> element")


def parse_stream_validation(data: Any) -> StreamDescriptor:
    """Maps a ``{url, errorCode, params}`` validation reply; non-zero codes are upstream failures."""

    if not isinstance(data, dict):
        raise SchemaError("stream validation reply is not an object")
    try:
        error_code = int(data.get("errorCode") or 0)
    except (TypeError, ValueError) as exc:
        raise SchemaError(f"unexpected errorCode {data.get('errorCode')!r}") from exc
    message = data.get("message")
    if error_code:
        raise UpstreamError(f"stream unavailable (errorCode {error_code}: {message or 'no message'})")
    try:
        params = [StreamParam(**param) for param in data.get("params") or []]
        return StreamDescriptor(
            url=require(data, "url"),
            error_code=error_code,
            message=message,
            params=params,
        )
    except (TypeError, ValidationError) as exc:
        raise SchemaError(f"stream validation reply has an unexpected shape: {exc}") from exc


def parse_media_assets(state: Dict[str, Any]) -> List[MediaAsset]:
    assets = require(state, "video", "currentClip", "media", "assets")
    if not isinstance(assets, list):
        raise SchemaError("video.currentClip.media.assets is not a list")
    media_assets: List[MediaAsset] = []
    for entry in assets:
        if not isinstance(entry, dict) or not entry.get("key") or not entry.get("type"):
            logging.debug("Skipping malformed media asset: %r", entry)
            continue
        media_assets.append(MediaAsset(asset_type=str(entry["type"]), key=str(entry["key"])))
    return media_assets


def find_asset(assets: List[MediaAsset], asset_type: str) -> Optional[MediaAsset]:
    return next((asset for asset in assets if asset.asset_type == asset_type), None)


class ManifestAPI:
    """Fetches the manifest stages that follow an asset descriptor."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def fetch_smil_stream(self, url: str, referer: str) -> StreamDescriptor:
        document = self._client.get_text(url, referer=referer)
        return parse_smil(document)

    def fetch_validated_stream(self, url: str, referer: str) -> StreamDescriptor:
        data = self._client.get_json(url, referer=referer)
        return parse_stream_validation(data)

    def fetch_watch_page_asset(self, page_url: str, asset_type: str = MEDIANET_ASSET) -> AssetDescriptor:
        page = self._client.get_text(page_url)
        state = extract_json_object(page, INITIAL_STATE_MARKER)
        assets = parse_media_assets(state)
        logging.debug("Watch page assets: %s", [asset.asset_type for asset in assets])

        asset = find_asset(assets, asset_type)
        if asset is None:
            available = ", ".join(a.asset_type for a in assets) or "none"
            raise SchemaError(f"couldn't find a {asset_type} asset on {page_url} (available: {available})")
        return AssetDescriptor(loader=asset.asset_type, key=asset.key)


class WatchPageClient(ApiClient):
    """Playback through the watch page's ``medianet`` asset and the stream validation reply."""

    def __init__(self, http_client: HttpClient) -> None:
        super().__init__(http_client)
        self._manifests = ManifestAPI(http_client)

    def fetch_playable_asset(self, canonical_id: str) -> AssetDescriptor:
        return self._manifests.fetch_watch_page_asset(self.watch_url(canonical_id))

    def fetch_stream_descriptor(self, asset: AssetDescriptor, referer: str) -> StreamDescriptor:
        return self._manifests.fetch_validated_stream(asset.key, referer)
