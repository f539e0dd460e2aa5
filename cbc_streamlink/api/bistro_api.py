"""Original player API: Olympics page state for listings, bistro orders and SMIL for playback."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from ..errors import SchemaError
from ..models import AssetDescriptor, ContentItem, Flag, StreamDescriptor
from ..utils.embedded_json import extract_json_object
from ..utils.identifiers import ApiGeneration
from ..utils.timeline import parse_instant
from .base import ApiClient, map_items, require, require_object
from .manifest_api import ManifestAPI

ORDER_URL = "https://www.cbc.ca/bistro/order"
LIVE_PAGE_URL = "https://www.cbc.ca/player/sports/olympics/live"
REPLAYS_PAGE_URL = "https://www.cbc.ca/player/sports/olympics/replays"
STATE_SCRIPT_SELECTOR = "script#initialStateDom"
PLATFORM_LOADER = "PlatformLoader"


def map_clip(entry: Dict[str, Any], flag: Flag) -> ContentItem:
    air_date = entry.get("airDate")
    return ContentItem(
        id=str(entry["id"]),
        title=entry["title"],
        flag=flag,
        published_at=parse_instant(air_date) if air_date is not None else None,
        duration_seconds=entry.get("duration") or None,
    )


def select_platform_asset(order: Dict[str, Any]) -> AssetDescriptor:
    """Picks the ``PlatformLoader`` descriptor of the first order item."""

    items = require(order, "items")
    if not isinstance(items, list) or not items:
        raise SchemaError("bistro order returned no items")
    descriptors = items[0].get("assetDescriptors") if isinstance(items[0], dict) else None
    if not isinstance(descriptors, list):
        raise SchemaError("bistro order item is missing assetDescriptors")

    for descriptor in descriptors:
        if isinstance(descriptor, dict) and descriptor.get("loader") == PLATFORM_LOADER and descriptor.get("key"):
            return AssetDescriptor(
                loader=PLATFORM_LOADER,
                key=descriptor["key"],
                mime_type=descriptor.get("mimeType"),
            )
    loaders = [d.get("loader") for d in descriptors if isinstance(d, dict)]
    raise SchemaError(f"couldn't find {PLATFORM_LOADER} among asset descriptors {loaders}")


def _clip_list(section: Dict[str, Any], path: str) -> List[Any]:
    items = section.get("items") or []
    if not isinstance(items, list):
        raise SchemaError(f"{path}.items is not a list")
    return items


class BistroAPI(ApiClient):
    """Integer media IDs, ``initialStateDom`` listings and SMIL manifests."""

    generation = ApiGeneration.BISTRO
    WATCH_URL_BASE = "https://www.cbc.ca/player/play/"

    def __init__(self, http_client) -> None:
        super().__init__(http_client)
        self._manifests = ManifestAPI(http_client)

    def fetch_live_and_upcoming(self) -> List[ContentItem]:
        video = self._fetch_video_state(LIVE_PAGE_URL)
        live_clips = require_object(video, "liveClips")
        raw_items: List[Any] = []
        for section in ("onNow", "upcoming"):
            clips = require_object(live_clips, section, optional=True)
            raw_items.extend(_clip_list(clips, f"liveClips.{section}"))
        return map_items(raw_items, lambda entry: self._map_video(entry, Flag.LIVE))

    def fetch_replays(self) -> List[ContentItem]:
        video = self._fetch_video_state(REPLAYS_PAGE_URL)
        raw_items: List[Any] = []
        categories = require_object(video, "clipsByCategory", optional=True)
        for category, clips in categories.items():
            if clips is None:
                continue
            if not isinstance(clips, dict):
                raise SchemaError(f"clipsByCategory.{category} is not an object")
            batch = _clip_list(clips, f"clipsByCategory.{category}")
            logging.debug("Category %s has %s clips", category, len(batch))
            raw_items.extend(batch)
        return map_items(raw_items, lambda entry: self._map_video(entry, Flag.VIDEO))

    def fetch_playable_asset(self, canonical_id: str) -> AssetDescriptor:
        params = {"mediaId": canonical_id, "limit": 10, "sort": "dateAired"}
        order = self._client.get_json(ORDER_URL, params=params)
        return select_platform_asset(order)

    def fetch_stream_descriptor(self, asset: AssetDescriptor, referer: str) -> StreamDescriptor:
        return self._manifests.fetch_smil_stream(asset.key, referer)

    @staticmethod
    def _map_video(entry: Dict[str, Any], flag: Flag) -> Optional[ContentItem]:
        # audio-only clips share the lists
        if entry.get("isVideo") is False:
            return None
        return map_clip(entry, flag)

    def _fetch_video_state(self, page_url: str) -> Dict[str, Any]:
        page = self._client.get_text(page_url)
        script = BeautifulSoup(page, "html.parser").select_one(STATE_SCRIPT_SELECTOR)
        if script is None:
            raise SchemaError(f"couldn't find {STATE_SCRIPT_SELECTOR} on {page_url}")
        state = extract_json_object(script.string or "")
        return require_object(state, "video")
