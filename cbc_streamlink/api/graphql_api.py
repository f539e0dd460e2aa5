"""GraphQL content API, the current listing backend."""

from __future__ import annotations

import logging
from typing import Any, List

from ..errors import SchemaError
from ..models import ContentItem, Flag
from ..utils.identifiers import ApiGeneration
from .base import map_content_node, map_items, require
from .manifest_api import WatchPageClient

GRAPHQL_URL = "https://www.cbc.ca/graphql"
LIVE_CATEGORY = "cbc-sports-live"
REPLAYS_CATEGORY = "cbc-sports-replays"
PAGE_SIZE = 50

CONTENT_ITEMS_QUERY = """
query clipsFromCategory($categorySlug: String!, $page: Int!, $pageSize: Int!) {
  allContentItems(categorySlug: $categorySlug, page: $page, pageSize: $pageSize, typeSet: cbc_ocelot) {
    nodes {
      id
      url
      title
      flag
      publishedAt
      updatedAt
      type
      media {
        duration
        hasCaptions
        streamType
      }
    }
  }
}
""".strip()


class GraphQLAPI(WatchPageClient):
    """Lists nodes of ``allContentItems``; IDs come from the node URLs."""

    generation = ApiGeneration.GRAPHQL

    def fetch_live_and_upcoming(self) -> List[ContentItem]:
        nodes = self._fetch_nodes(LIVE_CATEGORY)
        return map_items(nodes, lambda node: map_content_node(node, Flag.LIVE))

    def fetch_replays(self) -> List[ContentItem]:
        nodes = self._fetch_nodes(REPLAYS_CATEGORY)
        return map_items(nodes, lambda node: map_content_node(node, Flag.VIDEO))

    def _fetch_nodes(self, category_slug: str) -> List[Any]:
        payload = {
            "query": CONTENT_ITEMS_QUERY,
            "variables": {"categorySlug": category_slug, "page": 1, "pageSize": PAGE_SIZE},
        }
        data = self._client.post_json(GRAPHQL_URL, payload)
        if isinstance(data, dict) and data.get("errors"):
            logging.error("GraphQL errors: %s", data["errors"])
            raise SchemaError(f"GraphQL query failed: {data['errors'][0]}")
        nodes = require(data, "data", "allContentItems", "nodes")
        if not isinstance(nodes, list):
            raise SchemaError("data.allContentItems.nodes is not a list")
        return nodes
