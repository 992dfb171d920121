"""Playlists domain - named playlists mirrored to JSON documents.

This domain handles:
- Track and playlist records and their document format
- Catalog operations (create, add, remove, delete, list, show)
- The error taxonomy reported back to command handlers
"""

from .catalog import Catalog
from .exceptions import (
    PlaylistError,
    ValidationError,
    NotFoundError,
    DuplicateError,
    DuplicateTrackError,
    SourceMissingError,
    TrackIndexError,
    EmptyError,
    SingleTrackError,
    NotShuffledError,
    PersistenceError,
)
from .models import Track, Playlist, PlaylistSummary, OperationResult

__all__ = [
    "Catalog",
    "PlaylistError",
    "ValidationError",
    "NotFoundError",
    "DuplicateError",
    "DuplicateTrackError",
    "SourceMissingError",
    "TrackIndexError",
    "EmptyError",
    "SingleTrackError",
    "NotShuffledError",
    "PersistenceError",
    "Track",
    "Playlist",
    "PlaylistSummary",
    "OperationResult",
]
