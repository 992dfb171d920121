"""
Playlist catalog for tunedeck.

In-memory mapping of playlist name -> Playlist, loaded once from the document
store and mirrored back to it on every mutation. A mutation whose write fails
is undone before PersistenceError is raised, so memory never runs ahead of
disk by more than the operation in flight.
"""

from typing import Callable, Optional

from loguru import logger

from tunedeck.core.storage import RESERVED_KEYS, DocumentStore, path_exists

from .exceptions import (
    DuplicateError,
    DuplicateTrackError,
    NotFoundError,
    PersistenceError,
    SourceMissingError,
    TrackIndexError,
    ValidationError,
)
from .models import Playlist, PlaylistSummary, Track


class Catalog:
    """Single source of truth for playlists during a session."""

    def __init__(
        self,
        store: DocumentStore,
        exists: Callable[[str], bool] = path_exists,
    ):
        self.store = store
        self.exists = exists
        self._playlists: dict[str, Playlist] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._playlists

    def names(self) -> list[str]:
        return list(self._playlists)

    def playlists(self) -> list[Playlist]:
        """Live playlist records, for the playback and shuffle layers."""
        return list(self._playlists.values())

    def load(self) -> int:
        """Load every playlist document from the store.

        Unreadable documents are skipped with a warning so one corrupt file
        does not hide the rest of the library.

        Returns:
            Number of playlists loaded
        """
        self._playlists.clear()
        for key in self.store.list_keys():
            if key in RESERVED_KEYS:
                continue
            data = self.store.load_document(key)
            if data is None:
                continue
            try:
                playlist = Playlist.from_document(data)
            except (ValueError, KeyError, TypeError) as e:
                # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
                logger.warning(f"Skipping unreadable playlist document '{key}': {e}")
                continue
            if playlist.name != key:
                logger.warning(
                    f"Playlist document '{key}' names '{playlist.name}', using the key"
                )
                playlist.name = key
            self._playlists[key] = playlist

        logger.info(f"Loaded {len(self._playlists)} playlist(s)")
        return len(self._playlists)

    def find(self, name: str) -> Optional[Playlist]:
        return self._playlists.get(name)

    def get(self, name: str) -> Playlist:
        """Live record for name.

        Raises:
            NotFoundError: If no playlist has this name
        """
        playlist = self._playlists.get(name)
        if playlist is None:
            raise NotFoundError(name)
        return playlist

    def persist(self, playlist: Playlist) -> None:
        """Write one playlist document.

        Raises:
            PersistenceError: If the store reports a failed write
        """
        if not self.store.save_document(playlist.name, playlist.to_document()):
            raise PersistenceError(f'Failed to save playlist "{playlist.name}"')

    def create(self, name: str) -> Playlist:
        """
        Create a new empty playlist.

        Args:
            name: Playlist name (must be unique)

        Returns:
            The new playlist

        Raises:
            ValidationError: If name is empty or reserved
            DuplicateError: If name already exists
            PersistenceError: If the document could not be written
        """
        if not name or not name.strip():
            raise ValidationError("Playlist name cannot be empty")
        if name in RESERVED_KEYS:
            raise ValidationError(f'"{name}" is a reserved name')
        if name in self._playlists:
            raise DuplicateError(name)

        playlist = Playlist(name=name)
        self._playlists[name] = playlist
        try:
            self.persist(playlist)
        except PersistenceError:
            del self._playlists[name]
            raise

        logger.info(f"Created playlist '{name}'")
        return playlist

    def add_track(self, playlist_name: str, source_path: str) -> Track:
        """
        Append a track to a playlist.

        Args:
            playlist_name: Target playlist
            source_path: Path of the media file

        Returns:
            The new track

        Raises:
            NotFoundError: If the playlist does not exist
            SourceMissingError: If the media file does not exist
            DuplicateTrackError: If the path is already in the playlist
            PersistenceError: If the document could not be written
        """
        playlist = self.get(playlist_name)

        if not self.exists(source_path):
            raise SourceMissingError(source_path)
        if playlist.has_path(source_path):
            raise DuplicateTrackError(source_path)

        track = Track.from_path(source_path)
        previous_modified = playlist.modified
        playlist.tracks.append(track)
        if playlist.shuffled:
            # Restoring order later keeps the new track, at the end
            playlist.original_track_order.append(track)
        playlist.touch()
        try:
            self.persist(playlist)
        except PersistenceError:
            playlist.tracks.pop()
            if playlist.shuffled:
                playlist.original_track_order.pop()
            playlist.modified = previous_modified
            raise

        logger.debug(f"Added '{source_path}' to playlist '{playlist_name}'")
        return track

    def remove_track(self, playlist_name: str, one_based_index: int) -> Track:
        """
        Remove the track at a 1-based position.

        Returns:
            The removed track

        Raises:
            NotFoundError: If the playlist does not exist
            TrackIndexError: If the position is outside 1..len(tracks)
            PersistenceError: If the document could not be written
        """
        playlist = self.get(playlist_name)

        if not 1 <= one_based_index <= len(playlist.tracks):
            raise TrackIndexError(one_based_index, len(playlist.tracks))

        position = one_based_index - 1
        previous_modified = playlist.modified
        removed = playlist.tracks.pop(position)
        original_position = _position_of(playlist.original_track_order, removed)
        if original_position is not None:
            playlist.original_track_order.pop(original_position)
        playlist.touch()
        try:
            self.persist(playlist)
        except PersistenceError:
            playlist.tracks.insert(position, removed)
            if original_position is not None:
                playlist.original_track_order.insert(original_position, removed)
            playlist.modified = previous_modified
            raise

        logger.debug(f"Removed '{removed.path}' from playlist '{playlist_name}'")
        return removed

    def delete(self, playlist_name: str) -> Playlist:
        """
        Delete a playlist and its document.

        Returns:
            The deleted playlist

        Raises:
            NotFoundError: If the playlist does not exist
            PersistenceError: If the document could not be removed
        """
        playlist = self.get(playlist_name)

        if not self.store.delete_document(playlist_name):
            raise PersistenceError(f'Failed to delete playlist "{playlist_name}"')

        del self._playlists[playlist_name]
        logger.info(f"Deleted playlist '{playlist_name}'")
        return playlist

    def list_playlists(self, selected: Optional[str] = None) -> list[PlaylistSummary]:
        """Summaries of every playlist, in insertion order."""
        return [
            playlist.summary(is_selected=name == selected)
            for name, playlist in self._playlists.items()
        ]

    def show(self, name: str) -> Playlist:
        """Detached copy of a playlist; mutating it does not affect the catalog."""
        return self.get(name).copy()


def _position_of(tracks: list[Track], track: Track) -> Optional[int]:
    for position, candidate in enumerate(tracks):
        if candidate.id == track.id:
            return position
    return None
