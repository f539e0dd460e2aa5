"""Data models for content items, asset descriptors and streams."""

from .content_models import AssetDescriptor, ContentItem, Flag, MediaAsset
from .stream_models import PlaybackTarget, PlaylistVariant, StreamDescriptor, StreamParam

__all__ = [
    "AssetDescriptor",
    "ContentItem",
    "Flag",
    "MediaAsset",
    "PlaybackTarget",
    "PlaylistVariant",
    "StreamDescriptor",
    "StreamParam",
]
