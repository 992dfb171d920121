"""Playback domain - selection, cursor and shuffle state.

This domain handles:
- Playlist selection and cursor movement (circular next/previous)
- Global shuffle mode persisted in a reserved document
- Per-playlist shuffle with exact restoration of the original order
"""

from .state import UNSET, PlaybackCursor
from .shuffle import EnableOutcome, ShuffleEngine, fisher_yates

__all__ = [
    "UNSET",
    "PlaybackCursor",
    "EnableOutcome",
    "ShuffleEngine",
    "fisher_yates",
]
