"""Common contract for the CBC API generations."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..errors import SchemaError
from ..models import AssetDescriptor, ContentItem, Flag, MediaAsset, StreamDescriptor
from ..utils.http_client import HttpClient
from ..utils.identifiers import ApiGeneration, IdentifierResolver, trailing_id
from ..utils.timeline import parse_instant


class ApiClient:
    """One upstream API generation: listings plus the playable-asset chain."""

    generation = ApiGeneration.GRAPHQL
    WATCH_URL_BASE = "https://www.cbc.ca/player/play/video/"

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client
        self.resolver = IdentifierResolver(self.generation)

    def watch_url(self, canonical_id: str) -> str:
        return f"{self.WATCH_URL_BASE}{canonical_id}"

    def fetch_live_and_upcoming(self) -> List[ContentItem]:
        raise NotImplementedError

    def fetch_replays(self) -> List[ContentItem]:
        raise NotImplementedError

    def fetch_playable_asset(self, canonical_id: str) -> AssetDescriptor:
        raise NotImplementedError

    def fetch_stream_descriptor(self, asset: AssetDescriptor, referer: str) -> StreamDescriptor:
        raise NotImplementedError


def map_items(
    raw_items: Iterable[Any],
    mapper: Callable[[Dict[str, Any]], Optional[ContentItem]],
) -> List[ContentItem]:
    """Maps raw payload entries, skipping entries that cannot be mapped."""

    items: List[ContentItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            logging.debug("Skipping non-object entry: %r", raw)
            continue
        try:
            item = mapper(raw)
        except (KeyError, TypeError, ValueError) as exc:
            logging.warning("Skipping item %s: %s", raw.get("id") or raw.get("title"), exc)
            continue
        if item is not None:
            items.append(item)
    return items


def require(data: Any, *path: str) -> Any:
    """Walks nested objects, raising ``SchemaError`` naming the missing key."""

    current = data
    walked: List[str] = []
    for key in path:
        walked.append(key)
        if not isinstance(current, dict) or key not in current:
            raise SchemaError(f"response is missing {'.'.join(walked)}")
        current = current[key]
    return current


def require_object(data: Any, *path: str, optional: bool = False) -> Dict[str, Any]:
    """Like ``require`` but the value must be an object; ``optional`` maps absent or null to ``{}``."""

    current = data
    walked: List[str] = []
    for key in path:
        if not isinstance(current, dict):
            raise SchemaError(f"{'.'.join(walked) or 'response'} is not an object")
        walked.append(key)
        if current.get(key) is None:
            if optional:
                return {}
            raise SchemaError(f"response is missing {'.'.join(walked)}")
        current = current[key]
    if not isinstance(current, dict):
        raise SchemaError(f"{'.'.join(walked)} is not an object")
    return current


def map_content_node(entry: Dict[str, Any], flag: Flag) -> Optional[ContentItem]:
    """Maps a catalog/GraphQL content node; nodes of another type or flag map to ``None``."""

    node_type = entry.get("type")
    if node_type and str(node_type).lower() != "video":
        return None
    if entry.get("flag") != flag.value:
        return None

    url = entry.get("url")
    item_id = trailing_id(url) if url else None
    if item_id is None:
        item_id = str(entry["id"])

    published = entry.get("publishedAt")
    media = entry.get("media") or {}
    assets = [
        MediaAsset(asset_type=str(asset["type"]), key=str(asset["key"]))
        for asset in media.get("assets") or []
        if isinstance(asset, dict) and asset.get("type") and asset.get("key")
    ]
    return ContentItem(
        id=item_id,
        title=entry["title"],
        flag=flag,
        published_at=parse_instant(published) if published not in (None, "") else None,
        duration_seconds=media.get("duration") or None,
        url=url,
        media_assets=assets,
    )
