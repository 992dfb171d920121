"""
Shuffle mode for tunedeck

The global shuffle flag lives in its own reserved document. Shuffling a
playlist keeps its pre-shuffle order in original_track_order so that turning
shuffle off restores the exact sequence.
"""

import json
import random
from dataclasses import dataclass
from typing import Any, MutableSequence, Optional

from loguru import logger

from tunedeck.core.storage import SHUFFLE_STATE_KEY, DocumentStore
from tunedeck.domain.playlists.catalog import Catalog
from tunedeck.domain.playlists.exceptions import (
    EmptyError,
    NotShuffledError,
    PersistenceError,
    SingleTrackError,
)
from tunedeck.domain.playlists.models import Playlist, Track

from .state import PlaybackCursor


def fisher_yates(items: MutableSequence[Any], rng: random.Random) -> None:
    """Uniform in-place shuffle.

    Walks from the last index down to 1, swapping each element with a
    uniformly chosen element at or before it.
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


@dataclass(frozen=True)
class EnableOutcome:
    """What enable() did beyond flipping the flag."""

    shuffled_playlist: Optional[str] = None
    track_count: int = 0


class ShuffleEngine:
    """Global shuffle flag plus per-playlist shuffle and restore."""

    def __init__(
        self,
        store: DocumentStore,
        catalog: Catalog,
        cursor: PlaybackCursor,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.catalog = catalog
        self.cursor = cursor
        self.rng = rng or random.Random()
        self.enabled = False

    def load(self) -> bool:
        """Read the persisted flag, writing a default document if none exists."""
        data = self.store.load_document(SHUFFLE_STATE_KEY)
        if data is None:
            self.enabled = False
            if not self._save_flag():
                logger.warning("Could not write default shuffle state document")
            return self.enabled

        try:
            self.enabled = bool(json.loads(data.decode("utf-8")).get("enabled", False))
        except (ValueError, AttributeError) as e:
            logger.warning(f"Unreadable shuffle state document, using off: {e}")
            self.enabled = False
        return self.enabled

    def get_state(self) -> bool:
        return self.enabled

    def _save_flag(self) -> bool:
        document = json.dumps({"enabled": self.enabled}, indent=2).encode("utf-8")
        return self.store.save_document(SHUFFLE_STATE_KEY, document)

    def _set_flag(self, enabled: bool) -> None:
        previous = self.enabled
        self.enabled = enabled
        if not self._save_flag():
            self.enabled = previous
            raise PersistenceError("Failed to save shuffle state")

    def enable(self) -> EnableOutcome:
        """
        Turn shuffle on and shuffle the selected playlist, if any.

        The track under the cursor is anchored at the front so playback
        continues with it. A selected playlist with fewer than two tracks is
        left as it is.

        Raises:
            PersistenceError: If the flag or the shuffled playlist could not
                be written; the flag is restored in either case
        """
        previous = self.enabled
        self._set_flag(True)

        playlist = self.cursor.selected()
        if playlist is None or len(playlist.tracks) < 2:
            logger.info("Shuffle enabled")
            return EnableOutcome()

        try:
            self.shuffle_playlist(playlist.name, anchor_track=self.cursor.current())
        except PersistenceError:
            self.enabled = previous
            if not self._save_flag():
                logger.error("Could not restore shuffle state after failed shuffle")
            raise

        logger.info(f"Shuffle enabled, shuffled '{playlist.name}'")
        return EnableOutcome(
            shuffled_playlist=playlist.name, track_count=len(playlist.tracks)
        )

    def disable(self) -> int:
        """
        Turn shuffle off and restore every shuffled playlist.

        Returns:
            Number of playlists restored

        Raises:
            PersistenceError: If the flag could not be written
        """
        self._set_flag(False)

        restored = 0
        for playlist in self.catalog.playlists():
            if playlist.shuffled:
                self._restore(playlist)
                restored += 1

        logger.info(f"Shuffle disabled, restored {restored} playlist(s)")
        return restored

    def shuffle_playlist(
        self, name: str, anchor_track: Optional[Track] = None
    ) -> Playlist:
        """
        Randomize a playlist's order, remembering the original order.

        Re-shuffling starts from the remembered order rather than compounding
        shuffles. When anchor_track matches a track by path, that track is
        kept out of the shuffle and placed first.

        Raises:
            NotFoundError: If the playlist does not exist
            EmptyError: If it has no tracks
            SingleTrackError: If it has exactly one track
            PersistenceError: If the document could not be written; the
                playlist is left exactly as before
        """
        playlist = self.catalog.get(name)
        if not playlist.tracks:
            raise EmptyError(name)
        if len(playlist.tracks) == 1:
            raise SingleTrackError(name)

        snapshot = (
            list(playlist.tracks),
            list(playlist.original_track_order),
            playlist.shuffled,
            playlist.modified,
        )

        if playlist.shuffled and playlist.original_track_order:
            order = list(playlist.original_track_order)
        else:
            order = list(playlist.tracks)

        working = list(order)
        anchor = None
        if anchor_track is not None:
            for position, track in enumerate(working):
                if track.path == anchor_track.path:
                    anchor = working.pop(position)
                    break

        fisher_yates(working, self.rng)
        if anchor is not None:
            working.insert(0, anchor)

        playlist.original_track_order = order
        playlist.tracks = working
        playlist.shuffled = True
        playlist.touch()
        try:
            self.catalog.persist(playlist)
        except PersistenceError:
            (
                playlist.tracks,
                playlist.original_track_order,
                playlist.shuffled,
                playlist.modified,
            ) = snapshot
            raise

        if anchor is not None and self.cursor.is_selected(name):
            self.cursor.current_track_index = 0

        logger.debug(f"Shuffled {len(working)} tracks in '{name}'")
        return playlist

    def unshuffle_playlist(self, name: str) -> bool:
        """
        Restore a shuffled playlist to its original order.

        Returns:
            True if the restored order was written, False if the write failed
            (the in-memory restore is kept either way)

        Raises:
            NotFoundError: If the playlist does not exist
            NotShuffledError: If the playlist is not shuffled
        """
        playlist = self.catalog.get(name)
        if not playlist.shuffled:
            raise NotShuffledError(name)
        return self._restore(playlist)

    def _restore(self, playlist: Playlist) -> bool:
        if playlist.original_track_order:
            playlist.tracks = list(playlist.original_track_order)
        playlist.original_track_order = []
        playlist.shuffled = False
        playlist.touch()

        if self.cursor.is_selected(playlist.name):
            self.cursor.reset_cursor()

        try:
            self.catalog.persist(playlist)
        except PersistenceError as e:
            logger.error(f"Restored order of '{playlist.name}' not saved: {e}")
            return False
        return True
