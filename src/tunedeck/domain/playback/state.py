"""
Playback position tracking for tunedeck

Holds the selected playlist and the cursor into its track list. The cursor
is -1 when unset; every read re-validates it against the playlist's current
length because tracks can be removed between cursor moves.
"""

from typing import Optional

from loguru import logger

from tunedeck.domain.playlists.catalog import Catalog
from tunedeck.domain.playlists.models import Playlist, Track

UNSET = -1


class PlaybackCursor:
    """Selection and cursor state for one session (not persisted)."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self.selected_playlist: Optional[str] = None
        self.current_track_index: int = UNSET

    def select(self, name: str) -> Playlist:
        """
        Make a playlist the active one. The cursor is left alone.

        Raises:
            NotFoundError: If the playlist does not exist
        """
        playlist = self.catalog.get(name)
        self.selected_playlist = name
        logger.debug(f"Selected playlist '{name}'")
        return playlist

    def selected(self) -> Optional[Playlist]:
        """Live record of the selected playlist, if it still exists."""
        if self.selected_playlist is None:
            return None
        return self.catalog.find(self.selected_playlist)

    def is_selected(self, name: str) -> bool:
        return self.selected_playlist == name

    def clear_selection(self) -> None:
        self.selected_playlist = None
        self.current_track_index = UNSET

    def forget(self, name: str) -> None:
        """Drop the selection if it points at a deleted playlist."""
        if self.selected_playlist == name:
            logger.debug(f"Selected playlist '{name}' was deleted, clearing selection")
            self.clear_selection()

    def start_playback(self, name: str) -> Optional[Track]:
        """Put the cursor on the first track of a playlist.

        Returns None when the playlist is missing or empty. The playlist does
        not have to be the selected one.
        """
        playlist = self.catalog.find(name)
        if playlist is None or not playlist.tracks:
            return None

        self.current_track_index = 0
        return playlist.tracks[0]

    def next(self) -> Optional[Track]:
        """Advance the cursor, wrapping past the last track to the first."""
        playlist = self.selected()
        if playlist is None or not playlist.tracks:
            return None

        self.current_track_index += 1
        if self.current_track_index >= len(playlist.tracks):
            self.current_track_index = 0
        return playlist.tracks[self.current_track_index]

    def previous(self) -> Optional[Track]:
        """Move the cursor back, wrapping before the first track to the last."""
        playlist = self.selected()
        if playlist is None or not playlist.tracks:
            return None

        self.current_track_index -= 1
        if self.current_track_index < 0:
            self.current_track_index = len(playlist.tracks) - 1
        # A cursor left past the end by removals steps back into range
        elif self.current_track_index >= len(playlist.tracks):
            self.current_track_index = len(playlist.tracks) - 1
        return playlist.tracks[self.current_track_index]

    def current(self) -> Optional[Track]:
        if self.current_track_index < 0:
            return None
        playlist = self.selected()
        if playlist is None or self.current_track_index >= len(playlist.tracks):
            return None
        return playlist.tracks[self.current_track_index]

    def reset_cursor(self) -> None:
        self.current_track_index = UNSET

    def remaining_count(self) -> int:
        """Tracks left after the cursor, for queue display only."""
        if self.current_track_index < 0:
            return 0
        playlist = self.selected()
        if playlist is None:
            return 0
        return max(0, len(playlist.tracks) - self.current_track_index - 1)
