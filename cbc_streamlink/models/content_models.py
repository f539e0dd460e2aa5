"""Pydantic models for listable and playable CBC content."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class Flag(str, Enum):
    """Distinguishes live events from on-demand videos."""

    LIVE = "Live"
    VIDEO = "Video"


class MediaAsset(BaseModel):
    """An entry of a clip's media asset list (``medianet``, ``platform-dai``...)."""

    asset_type: str
    key: str


class AssetDescriptor(BaseModel):
    """Loader/key pair pointing at the next manifest stage."""

    loader: str
    key: str
    mime_type: Optional[str] = None


class ContentItem(BaseModel):
    """One live, upcoming or replay item, independent of the API generation."""

    id: str
    title: str
    flag: Flag
    published_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    url: Optional[str] = None
    media_assets: List[MediaAsset] = []
