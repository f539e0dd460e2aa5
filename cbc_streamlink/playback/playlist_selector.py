"""Picks a fixed-quality variant out of an HLS master playlist."""

from __future__ import annotations

import logging
from typing import List
from urllib.parse import urljoin, urlsplit, urlunsplit

import m3u8

from ..errors import NoVariants, SchemaError
from ..models import PlaylistVariant


def collect_variants(master_text: str) -> List[PlaylistVariant]:
    """Returns standard and I-frame variants in document order."""

    try:
        return _variants_of(m3u8.loads(master_text))
    except (TypeError, ValueError) as exc:
        raise SchemaError(f"master playlist could not be parsed: {exc}") from exc


def _variants_of(playlist: m3u8.M3U8) -> List[PlaylistVariant]:
    variants: List[PlaylistVariant] = []
    for entry in playlist.playlists:
        info = entry.stream_info
        bandwidth = info.bandwidth if info and info.bandwidth is not None else 0
        variants.append(PlaylistVariant(bandwidth=bandwidth, uri=entry.uri))
    for entry in playlist.iframe_playlists:
        info = entry.iframe_stream_info
        bandwidth = info.bandwidth if info and info.bandwidth is not None else 0
        variants.append(PlaylistVariant(bandwidth=bandwidth, uri=entry.uri, iframe=True))
    return variants


def select_best_variant(master_text: str) -> PlaylistVariant:
    variants = collect_variants(master_text)
    if not variants:
        raise NoVariants("master playlist does not list any variant")
    # max() keeps the first of equal maxima
    best = max(variants, key=lambda variant: variant.bandwidth)
    logging.debug("Selected %s at %s bps out of %s variants", best.uri, best.bandwidth, len(variants))
    return best


def select_best(master_text: str) -> str:
    """Returns the URI of the highest-bandwidth variant."""

    return select_best_variant(master_text).uri


def to_absolute(master_url: str, variant_uri: str) -> str:
    """Resolves ``variant_uri`` against the directory holding the master playlist."""

    if urlsplit(variant_uri).scheme:
        return variant_uri
    parts = urlsplit(master_url)
    directory = parts.path.rsplit("/", 1)[0] + "/"
    base = urlunsplit((parts.scheme, parts.netloc, directory, "", ""))
    return urljoin(base, variant_uri)
