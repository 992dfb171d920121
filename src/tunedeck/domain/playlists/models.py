"""
Playlist domain models.

Contains data structures for tracks, playlists, catalog summaries and the
uniform result returned to command handlers.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Optional

from .exceptions import PlaylistError

UNKNOWN = "Unknown"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return utc_now()
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Track:
    """Reference to a media file plus descriptive metadata.

    The id is a label only; duplicate detection within a playlist uses path.
    """

    id: str
    path: str
    title: str
    artist: str = UNKNOWN
    album: str = UNKNOWN
    duration: float = 0  # in seconds
    added: datetime = field(default_factory=utc_now)

    @classmethod
    def from_path(cls, path: str) -> "Track":
        """Build a track for a newly added file (no tag reading)."""
        return cls(
            id=uuid.uuid4().hex,
            path=path,
            title=PurePath(path).name,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "duration": self.duration,
            "added": self.added.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Track":
        path = data["path"]
        return cls(
            id=data.get("id") or uuid.uuid4().hex,
            path=path,
            title=data.get("title") or PurePath(path).name,
            artist=data.get("artist", UNKNOWN),
            album=data.get("album", UNKNOWN),
            duration=data.get("duration", 0),
            added=_parse_timestamp(data.get("added")),
        )


@dataclass
class Playlist:
    """Named, ordered collection of tracks with shuffle restoration metadata.

    original_track_order is non-empty only while shuffled is True; it holds
    the pre-shuffle sequence used to restore the playlist exactly.
    """

    name: str
    description: str = ""
    created: datetime = field(default_factory=utc_now)
    modified: datetime = field(default_factory=utc_now)
    tracks: list[Track] = field(default_factory=list)
    shuffled: bool = False
    original_track_order: list[Track] = field(default_factory=list)

    def touch(self) -> None:
        """Mark a structural mutation."""
        self.modified = utc_now()

    def has_path(self, path: str) -> bool:
        return any(track.path == path for track in self.tracks)

    def copy(self) -> "Playlist":
        """Detached copy; tracks are immutable so list copies suffice."""
        return Playlist(
            name=self.name,
            description=self.description,
            created=self.created,
            modified=self.modified,
            tracks=list(self.tracks),
            shuffled=self.shuffled,
            original_track_order=list(self.original_track_order),
        )

    def summary(self, is_selected: bool = False) -> "PlaylistSummary":
        return PlaylistSummary(
            name=self.name,
            track_count=len(self.tracks),
            created=self.created,
            modified=self.modified,
            is_selected=is_selected,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
            "tracks": [track.to_dict() for track in self.tracks],
            "shuffled": self.shuffled,
            "original_track_order": [
                track.to_dict() for track in self.original_track_order
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Playlist":
        if not isinstance(data, dict):
            raise TypeError(f"Playlist document must be an object, got {type(data).__name__}")
        shuffled = bool(data.get("shuffled", False))
        original = [Track.from_dict(t) for t in data.get("original_track_order", [])]
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            created=_parse_timestamp(data.get("created")),
            modified=_parse_timestamp(data.get("modified")),
            tracks=[Track.from_dict(t) for t in data.get("tracks", [])],
            shuffled=shuffled,
            # A stale buffer on an unshuffled playlist is dropped
            original_track_order=original if shuffled else [],
        )

    def to_document(self) -> bytes:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")

    @classmethod
    def from_document(cls, data: bytes) -> "Playlist":
        return cls.from_dict(json.loads(data.decode("utf-8")))


@dataclass(frozen=True)
class PlaylistSummary:
    """One row of the playlist listing."""

    name: str
    track_count: int
    created: datetime
    modified: datetime
    is_selected: bool


@dataclass(frozen=True)
class OperationResult:
    """Uniform outcome of a session operation.

    Expected failures are reported here rather than raised; error carries the
    domain exception for callers that need to branch on its type.
    """

    success: bool
    message: str
    error: Optional[PlaylistError] = None
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **payload: Any) -> "OperationResult":
        return cls(success=True, message=message, payload=payload)

    @classmethod
    def fail(cls, error: PlaylistError, **payload: Any) -> "OperationResult":
        return cls(success=False, message=str(error), error=error, payload=payload)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]
