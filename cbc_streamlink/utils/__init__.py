"""Utility helpers for HTTP, identifiers, proxies and timeline rendering."""

from .http_client import HttpClient
from .identifiers import ApiGeneration, IdentifierResolver
from .proxy import for_player_process, for_transport

__all__ = ["HttpClient", "ApiGeneration", "IdentifierResolver", "for_transport", "for_player_process"]
