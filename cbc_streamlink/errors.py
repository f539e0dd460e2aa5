"""Exception hierarchy shared by the resolver, API clients and player."""

from __future__ import annotations

from typing import Optional


class CbcStreamlinkError(Exception):
    """Base class for every failure that ends an invocation."""


class InvalidIdentifier(CbcStreamlinkError, ValueError):
    """Raised when user input is neither a known ID nor a watch-page URL."""


class UpstreamError(CbcStreamlinkError):
    """Raised on transport failures, non-2xx statuses and unavailable streams."""


class SchemaError(CbcStreamlinkError):
    """Raised when a payload no longer matches the expected shape."""


class NoVariants(SchemaError):
    """Raised when a master playlist does not list any variant."""


class PlayerProcessError(CbcStreamlinkError):
    """Raised when the player exits unsuccessfully or cannot be started."""

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode
