"""REST catalog API with dotted source IDs."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..errors import SchemaError
from ..models import ContentItem, Flag
from ..utils.identifiers import ApiGeneration
from .base import map_content_node, map_items
from .manifest_api import WatchPageClient

CATALOG_URL = "https://www.cbc.ca/aggregate_api/v1/items"
LIVE_LINEUP = "sports-live"
REPLAYS_CATEGORY = "sports-replays"
PAGE_SIZE = 50


class CatalogAPI(WatchPageClient):
    """Lists items through the aggregate catalog; IDs look like ``1.6321234``."""

    generation = ApiGeneration.CATALOG

    def fetch_live_and_upcoming(self) -> List[ContentItem]:
        entries = self._fetch_items({"lineupSlug": LIVE_LINEUP})
        return map_items(entries, lambda entry: map_content_node(entry, Flag.LIVE))

    def fetch_replays(self) -> List[ContentItem]:
        entries = self._fetch_items({"categorySet": REPLAYS_CATEGORY})
        return map_items(entries, lambda entry: map_content_node(entry, Flag.VIDEO))

    def _fetch_items(self, filters: Dict[str, Any]) -> List[Any]:
        params = {"typeSet": "cbc-ocelot", "pageSize": PAGE_SIZE, "page": 1, **filters}
        data = self._client.get_json(CATALOG_URL, params=params)
        # the endpoint answers either a bare list or {"items": [...]}
        if isinstance(data, dict):
            data = data.get("items")
        if not isinstance(data, list):
            raise SchemaError("catalog response does not contain an item list")
        logging.debug("Catalog returned %s entries for %s", len(data), filters)
        return data
