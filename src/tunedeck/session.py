"""Playlist session: the operations surface used by command handlers.

A PlaylistSession bundles the catalog, the playback cursor and the shuffle
engine for one user session. Every operation returns an OperationResult;
expected failures (unknown playlist, duplicate track, failed write, ...) are
reported in the result, while unexpected environment errors propagate.
"""

import random
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from tunedeck.core.config import Config, get_playlists_dir
from tunedeck.core.storage import DocumentStore, JsonDocumentStore, path_exists
from tunedeck.domain.playback.shuffle import ShuffleEngine
from tunedeck.domain.playback.state import PlaybackCursor
from tunedeck.domain.playlists.catalog import Catalog
from tunedeck.domain.playlists.exceptions import PlaylistError, ValidationError
from tunedeck.domain.playlists.models import OperationResult, Track

NO_SELECTION_MESSAGE = (
    'No playlist selected. Use "playlist <name>" to select a playlist first'
)


class PlaylistSession:
    """Catalog, selection/cursor and shuffle state for one session."""

    def __init__(
        self,
        store: DocumentStore,
        exists: Callable[[str], bool] = path_exists,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.catalog = Catalog(store, exists=exists)
        self.cursor = PlaybackCursor(self.catalog)
        self.shuffle = ShuffleEngine(store, self.catalog, self.cursor, rng=rng)

    @classmethod
    def open(cls, data_dir: Path, **kwargs) -> "PlaylistSession":
        """Session over a JSON document directory, loaded and ready."""
        store = JsonDocumentStore(data_dir)
        store.ensure_root()
        session = cls(store, **kwargs)
        session.load()
        return session

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "PlaylistSession":
        return cls.open(get_playlists_dir(config), **kwargs)

    def load(self) -> None:
        """Load playlists and the shuffle flag from the store."""
        count = self.catalog.load()
        enabled = self.shuffle.load()
        logger.info(
            f"Session loaded: {count} playlist(s), shuffle {'on' if enabled else 'off'}"
        )

    @property
    def selected_playlist(self) -> Optional[str]:
        return self.cursor.selected_playlist

    # Catalog

    def create(self, name: str) -> OperationResult:
        try:
            playlist = self.catalog.create(name)
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            f'Playlist "{name}" created successfully', playlist=playlist.copy()
        )

    def add_track(self, playlist_name: str, source_path: str) -> OperationResult:
        try:
            track = self.catalog.add_track(playlist_name, source_path)
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            f'Added "{track.title}" to playlist "{playlist_name}"', track=track
        )

    def add_to_selected(self, source_path: str) -> OperationResult:
        """Add a track to whichever playlist is selected."""
        if self.cursor.selected_playlist is None:
            return OperationResult.fail(ValidationError(NO_SELECTION_MESSAGE))
        return self.add_track(self.cursor.selected_playlist, source_path)

    def remove_track(self, playlist_name: str, one_based_index: int) -> OperationResult:
        try:
            removed = self.catalog.remove_track(playlist_name, one_based_index)
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            f'Removed "{removed.title}" from playlist "{playlist_name}"',
            track=removed,
        )

    def delete(self, playlist_name: str) -> OperationResult:
        try:
            self.catalog.delete(playlist_name)
        except PlaylistError as e:
            return OperationResult.fail(e)
        self.cursor.forget(playlist_name)
        return OperationResult.ok(f'Playlist "{playlist_name}" deleted')

    def list(self) -> OperationResult:
        summaries = self.catalog.list_playlists(selected=self.cursor.selected_playlist)
        return OperationResult.ok(
            f"Found {len(summaries)} playlist(s)", playlists=summaries
        )

    def show(self, name: str) -> OperationResult:
        try:
            playlist = self.catalog.show(name)
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(f"Playlist: {name}", playlist=playlist)

    # Selection and cursor

    def select(self, name: str) -> OperationResult:
        try:
            playlist = self.cursor.select(name)
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            f'Playlist "{name}" selected ({len(playlist.tracks)} tracks)',
            playlist=playlist.copy(),
        )

    def _no_track_message(self, name: Optional[str] = None) -> str:
        name = name if name is not None else self.cursor.selected_playlist
        if name is None:
            return NO_SELECTION_MESSAGE
        playlist = self.catalog.find(name)
        if playlist is None:
            return f'Playlist "{name}" not found'
        if not playlist.tracks:
            return f'Playlist "{name}" is empty'
        return "No track is currently playing"

    def _track_result(
        self, track: Optional[Track], message: str, name: Optional[str] = None
    ) -> OperationResult:
        if track is None:
            return OperationResult(
                success=False,
                message=self._no_track_message(name),
                payload={"track": None},
            )
        return OperationResult.ok(
            message, track=track, remaining=self.cursor.remaining_count()
        )

    def start_playback(self, name: Optional[str] = None) -> OperationResult:
        """Start a playlist from its first track (the selection by default)."""
        name = name if name is not None else self.cursor.selected_playlist
        if name is None:
            return OperationResult(success=False, message=NO_SELECTION_MESSAGE)
        track = self.cursor.start_playback(name)
        return self._track_result(
            track, f"Now playing: {track.title}" if track else "", name=name
        )

    def next(self) -> OperationResult:
        track = self.cursor.next()
        return self._track_result(track, f"Next: {track.title}" if track else "")

    def previous(self) -> OperationResult:
        track = self.cursor.previous()
        return self._track_result(track, f"Previous: {track.title}" if track else "")

    def current(self) -> OperationResult:
        track = self.cursor.current()
        return self._track_result(track, f"Current: {track.title}" if track else "")

    def reset_cursor(self) -> OperationResult:
        self.cursor.reset_cursor()
        return OperationResult.ok("Playlist position reset")

    def remaining_count(self) -> OperationResult:
        remaining = self.cursor.remaining_count()
        return OperationResult.ok(
            f"{remaining} track(s) remaining", remaining=remaining
        )

    # Shuffle

    def get_shuffle_state(self) -> OperationResult:
        state = self.shuffle.get_state()
        return OperationResult.ok(
            f"Shuffle is {'on' if state else 'off'}", state=state
        )

    def enable_shuffle(self) -> OperationResult:
        try:
            outcome = self.shuffle.enable()
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            "Shuffle enabled",
            shuffled_playlist=outcome.shuffled_playlist,
            track_count=outcome.track_count,
        )

    def disable_shuffle(self) -> OperationResult:
        try:
            restored = self.shuffle.disable()
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok("Shuffle disabled", restored_count=restored)

    def shuffle_playlist(
        self, name: str, anchor_track: Optional[Track] = None
    ) -> OperationResult:
        try:
            playlist = self.shuffle.shuffle_playlist(name, anchor_track=anchor_track)
        except PlaylistError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            f'Shuffled {len(playlist.tracks)} songs in playlist "{name}"',
            track_count=len(playlist.tracks),
            playlist=playlist.copy(),
        )

    def unshuffle_playlist(self, name: str) -> OperationResult:
        try:
            persisted = self.shuffle.unshuffle_playlist(name)
        except PlaylistError as e:
            return OperationResult.fail(e)
        message = f'Restored original order of playlist "{name}"'
        if not persisted:
            message += " (not saved to disk)"
        return OperationResult.ok(message, persisted=persisted)
