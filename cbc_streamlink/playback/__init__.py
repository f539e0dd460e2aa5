"""Variant selection and player invocation."""

from .player import PlayerCommand
from .playlist_selector import select_best, to_absolute

__all__ = ["PlayerCommand", "select_best", "to_absolute"]
