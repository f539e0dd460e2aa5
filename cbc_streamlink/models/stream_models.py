"""Models describing resolved streams and playlist variants."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel


class StreamParam(BaseModel):
    name: str
    value: Union[int, str]


class StreamDescriptor(BaseModel):
    """Final-stage stream location; a non-zero ``error_code`` means unavailable."""

    url: str
    error_code: int = 0
    message: Optional[str] = None
    params: List[StreamParam] = []


class PlaylistVariant(BaseModel):
    """One rendition listed in an HLS master playlist."""

    bandwidth: int
    uri: str
    iframe: bool = False


class PlaybackTarget(BaseModel):
    """What gets handed to the player: a URL plus the headers it must send."""

    url: str
    headers: Dict[str, str]
