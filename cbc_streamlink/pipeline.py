"""Composes identifier resolution, API lookups and variant selection."""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import List, Optional

from .api import ApiClient
from .models import PlaybackTarget
from .playback.playlist_selector import select_best, to_absolute
from .utils.http_client import USER_AGENT, HttpClient
from .utils.timeline import classify, describe, local_timezone


class Pipeline:
    """Runs one resolution or one listing against a single API client."""

    def __init__(self, client: ApiClient, http_client: HttpClient, select_variant: bool = False) -> None:
        self.client = client
        self._http_client = http_client
        self.select_variant = select_variant

    def resolve(self, user_input: str) -> PlaybackTarget:
        canonical_id = self.client.resolver.resolve(user_input)
        watch_url = self.client.watch_url(canonical_id)
        logging.info("Resolving %s via the %s API", canonical_id, self.client.generation.value)

        asset = self.client.fetch_playable_asset(canonical_id)
        logging.debug("Asset descriptor %s -> %s", asset.loader, asset.key)
        stream = self.client.fetch_stream_descriptor(asset, referer=watch_url)
        url = stream.url

        if self.select_variant:
            master = self._http_client.get_text(url, referer=watch_url)
            url = to_absolute(url, select_best(master))
            logging.info("Pinned variant %s", url)

        return PlaybackTarget(url=url, headers={"User-Agent": USER_AGENT, "Referer": watch_url})

    def list_items(
        self,
        replays: bool = False,
        full_urls: bool = False,
        now: Optional[datetime] = None,
        local_zone: Optional[tzinfo] = None,
    ) -> List[str]:
        items = self.client.fetch_replays() if replays else self.client.fetch_live_and_upcoming()
        local_zone = local_zone or local_timezone()
        now = now or datetime.now(timezone.utc)
        prefix = self.client.WATCH_URL_BASE if full_urls else ""

        lines: List[str] = []
        for item in items:
            if item.published_at is None:
                logging.warning("Skipping %s (%s): no air date", item.id, item.title)
                continue
            lines.append(describe(item, classify(item, now, local_zone), prefix))
        return lines
