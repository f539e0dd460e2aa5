"""Turn user input (IDs or watch-page URLs) into canonical CBC identifiers."""

from __future__ import annotations

import enum
import re
from urllib.parse import urlsplit

from ..errors import InvalidIdentifier

NUMERIC_ID = re.compile(r"^[0-9]+$")
# https://www.cbc.ca/player/play/2655429955 or .../play/event-name-2655429955?cmp=x
BISTRO_URL = re.compile(r"^https?://www\.cbc\.ca/player/play/(?:[\w-]+-)?(?P<id>[0-9]+)/?(?:[?#].*)?$")
# 1.6321234, 30045 or the same behind the watch-page prefix
CATALOG_ID = re.compile(
    r"^(?:https?://www\.cbc\.ca/player/play/(?:video/)?(?:[\w-]+-)?)?(?P<id>[0-9]+(?:\.[0-9]+)?)/?(?:[?#].*)?$"
)
TRAILING_ID = re.compile(r"^[0-9]+(?:\.[0-9]+)*$")


class ApiGeneration(str, enum.Enum):
    BISTRO = "bistro"
    CATALOG = "catalog"
    GRAPHQL = "graphql"


def is_numeric(value: str) -> bool:
    return bool(value) and NUMERIC_ID.match(value) is not None


def trailing_segment(path: str) -> str:
    """Returns the text after the last ``-`` or ``/`` of ``path``."""

    stripped = path.rstrip("/")
    cut = max(stripped.rfind("-"), stripped.rfind("/"))
    return stripped[cut + 1 :]


def trailing_id(url: str) -> str | None:
    """Extracts the trailing ID from a watch URL or path, if it has one."""

    path = urlsplit(url).path if "://" in url else url
    last_segment = path.rstrip("/").rsplit("/", 1)[-1]
    candidate = trailing_segment(last_segment)
    if TRAILING_ID.match(candidate):
        return candidate
    return None


class IdentifierResolver:
    """Validates and canonicalizes identifiers for one API generation."""

    def __init__(self, generation: ApiGeneration = ApiGeneration.GRAPHQL) -> None:
        self.generation = ApiGeneration(generation)

    def resolve(self, value: str) -> str:
        value = (value or "").strip()
        if is_numeric(value):
            return value

        if self.generation is ApiGeneration.BISTRO:
            match = BISTRO_URL.match(value)
            canonical = match.group("id") if match else None
        elif self.generation is ApiGeneration.CATALOG:
            match = CATALOG_ID.match(value)
            canonical = match.group("id") if match else None
        else:
            canonical = self._resolve_url(value)

        if not canonical:
            raise InvalidIdentifier(f"{value!r} is not a CBC ID or watch-page URL")
        return canonical

    @staticmethod
    def _resolve_url(value: str) -> str | None:
        parts = urlsplit(value)
        host = (parts.hostname or "").lower()
        if parts.scheme not in {"http", "https"}:
            return None
        if host != "cbc.ca" and not host.endswith(".cbc.ca"):
            return None
        if not parts.path.strip("/"):
            return None
        return trailing_id(parts.path)
