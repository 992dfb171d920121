"""Tests for shuffle mode, per-playlist shuffle and order restoration."""

import json
import random
from collections import Counter

import pytest

from tunedeck.core.storage import SHUFFLE_STATE_KEY
from tunedeck.domain.playback.shuffle import ShuffleEngine, fisher_yates
from tunedeck.domain.playback.state import UNSET
from tunedeck.domain.playlists.exceptions import (
    EmptyError,
    NotFoundError,
    NotShuffledError,
    PersistenceError,
    SingleTrackError,
)


def track_paths(tracks) -> list[str]:
    return [track.path for track in tracks]


@pytest.fixture
def engine(road_trip) -> ShuffleEngine:
    return road_trip.shuffle


@pytest.fixture
def catalog(road_trip):
    return road_trip.catalog


@pytest.fixture
def cursor(road_trip):
    return road_trip.cursor


class TestFisherYates:
    """Tests for the in-place shuffle."""

    def test_is_a_permutation(self, rng) -> None:
        items = list(range(20))

        fisher_yates(items, rng)

        assert sorted(items) == list(range(20))

    @pytest.mark.parametrize("items", [[], ["only"]])
    def test_short_sequences_untouched(self, rng, items) -> None:
        expected = list(items)
        fisher_yates(items, rng)
        assert items == expected

    def test_same_seed_same_order(self) -> None:
        first, second = list("abcdefgh"), list("abcdefgh")

        fisher_yates(first, random.Random(7))
        fisher_yates(second, random.Random(7))

        assert first == second

    def test_permutations_are_uniform(self) -> None:
        """All 6 orders of 3 items appear close to 1/6 of the time."""
        rng = random.Random(2024)
        trials = 6000
        counts = Counter()
        for _ in range(trials):
            items = ["A", "B", "C"]
            fisher_yates(items, rng)
            counts[tuple(items)] += 1

        assert len(counts) == 6
        for permutation, count in counts.items():
            assert abs(count - trials / 6) < 150, permutation


class TestShufflePlaylist:
    """Tests for ShuffleEngine.shuffle_playlist."""

    def test_keeps_original_order(self, engine, catalog) -> None:
        original = list(catalog.get("road-trip").tracks)

        playlist = engine.shuffle_playlist("road-trip")

        assert playlist.shuffled is True
        assert playlist.original_track_order == original
        assert sorted(track_paths(playlist.tracks)) == ["A.mp3", "B.mp3", "C.mp3"]

    def test_round_trip_restores_exact_order(self, engine, catalog) -> None:
        original = list(catalog.get("road-trip").tracks)

        engine.shuffle_playlist("road-trip")
        engine.unshuffle_playlist("road-trip")

        playlist = catalog.get("road-trip")
        assert playlist.tracks == original
        assert playlist.shuffled is False
        assert playlist.original_track_order == []

    def test_reshuffle_starts_from_original_order(self, engine, catalog) -> None:
        original = list(catalog.get("road-trip").tracks)

        engine.shuffle_playlist("road-trip")
        engine.shuffle_playlist("road-trip")

        assert catalog.get("road-trip").original_track_order == original
        engine.unshuffle_playlist("road-trip")
        assert catalog.get("road-trip").tracks == original

    def test_anchor_goes_first(self, engine, catalog) -> None:
        anchor = catalog.get("road-trip").tracks[2]

        for _ in range(10):
            playlist = engine.shuffle_playlist("road-trip", anchor_track=anchor)
            assert playlist.tracks[0] == anchor
            assert len(playlist.tracks) == 3

    def test_orders_behind_anchor_are_uniform(self, engine, road_trip) -> None:
        """With A anchored, each of the 6 orders of B, C, D is about equally likely."""
        road_trip.add_track("road-trip", "D.mp3")
        anchor = road_trip.catalog.get("road-trip").tracks[0]
        engine.rng = random.Random(99)
        trials = 6000
        counts = Counter()

        for _ in range(trials):
            playlist = engine.shuffle_playlist("road-trip", anchor_track=anchor)
            assert playlist.tracks[0] == anchor
            counts[tuple(track_paths(playlist.tracks[1:]))] += 1

        assert len(counts) == 6
        for order, count in counts.items():
            assert abs(count - trials / 6) < 150, order

    def test_anchor_not_in_playlist_is_ignored(self, engine, road_trip) -> None:
        road_trip.create("other")
        road_trip.add_track("other", "E.mp3")
        stranger = road_trip.catalog.get("other").tracks[0]

        playlist = engine.shuffle_playlist("road-trip", anchor_track=stranger)

        assert sorted(track_paths(playlist.tracks)) == ["A.mp3", "B.mp3", "C.mp3"]

    def test_anchor_moves_cursor_of_selected_playlist(self, engine, catalog, cursor) -> None:
        cursor.select("road-trip")
        cursor.start_playback("road-trip")
        cursor.next()
        anchor = cursor.current()

        engine.shuffle_playlist("road-trip", anchor_track=anchor)

        assert cursor.current_track_index == 0
        assert cursor.current() == anchor

    def test_empty_playlist(self, engine, road_trip, store) -> None:
        road_trip.create("empty")
        saves = store.save_calls

        with pytest.raises(EmptyError):
            engine.shuffle_playlist("empty")

        assert road_trip.catalog.get("empty").shuffled is False
        assert store.save_calls == saves

    def test_single_track_playlist(self, engine, road_trip) -> None:
        road_trip.create("solo")
        road_trip.add_track("solo", "D.mp3")

        with pytest.raises(SingleTrackError):
            engine.shuffle_playlist("solo")

        playlist = road_trip.catalog.get("solo")
        assert playlist.shuffled is False
        assert playlist.original_track_order == []

    def test_unknown_playlist(self, engine) -> None:
        with pytest.raises(NotFoundError):
            engine.shuffle_playlist("nope")

    def test_failed_write_leaves_playlist_unchanged(self, engine, catalog, store) -> None:
        playlist = catalog.get("road-trip")
        before = (list(playlist.tracks), playlist.modified)
        store.fail_saves = True

        with pytest.raises(PersistenceError):
            engine.shuffle_playlist("road-trip")

        assert playlist.tracks == before[0]
        assert playlist.modified == before[1]
        assert playlist.shuffled is False
        assert playlist.original_track_order == []

    def test_shuffled_state_is_persisted(self, engine, store) -> None:
        engine.shuffle_playlist("road-trip")

        document = json.loads(store.documents["road-trip"].decode("utf-8"))
        assert document["shuffled"] is True
        assert [t["path"] for t in document["original_track_order"]] == [
            "A.mp3",
            "B.mp3",
            "C.mp3",
        ]


class TestUnshufflePlaylist:
    """Tests for ShuffleEngine.unshuffle_playlist."""

    def test_not_shuffled(self, engine) -> None:
        with pytest.raises(NotShuffledError):
            engine.unshuffle_playlist("road-trip")

    def test_resets_cursor_of_selected_playlist(self, engine, cursor) -> None:
        cursor.select("road-trip")
        cursor.start_playback("road-trip")
        engine.shuffle_playlist("road-trip")

        engine.unshuffle_playlist("road-trip")

        assert cursor.current_track_index == UNSET

    def test_failed_write_keeps_memory_restore(self, engine, catalog, store) -> None:
        original = list(catalog.get("road-trip").tracks)
        engine.shuffle_playlist("road-trip")
        store.fail_saves = True

        assert engine.unshuffle_playlist("road-trip") is False

        playlist = catalog.get("road-trip")
        assert playlist.tracks == original
        assert playlist.shuffled is False

    def test_tracks_added_while_shuffled_survive(self, engine, road_trip) -> None:
        engine.shuffle_playlist("road-trip")
        road_trip.add_track("road-trip", "D.mp3")
        road_trip.remove_track("road-trip", 1)
        remaining = track_paths(road_trip.catalog.get("road-trip").tracks)

        engine.unshuffle_playlist("road-trip")

        restored = track_paths(road_trip.catalog.get("road-trip").tracks)
        assert sorted(restored) == sorted(remaining)
        assert restored[-1] == "D.mp3"


class TestEnableDisable:
    """Tests for the global shuffle flag."""

    def test_enable_anchors_current_track(self, engine, catalog, cursor) -> None:
        cursor.select("road-trip")
        cursor.start_playback("road-trip")
        cursor.next()  # B

        outcome = engine.enable()

        playlist = catalog.get("road-trip")
        assert engine.get_state() is True
        assert outcome.shuffled_playlist == "road-trip"
        assert outcome.track_count == 3
        assert playlist.tracks[0].path == "B.mp3"
        assert track_paths(playlist.original_track_order) == ["A.mp3", "B.mp3", "C.mp3"]
        assert cursor.current().path == "B.mp3"

    def test_enable_without_selection(self, engine, catalog) -> None:
        outcome = engine.enable()

        assert engine.get_state() is True
        assert outcome.shuffled_playlist is None
        assert catalog.get("road-trip").shuffled is False

    def test_enable_skips_single_track_selection(self, engine, road_trip) -> None:
        road_trip.create("solo")
        road_trip.add_track("solo", "D.mp3")
        road_trip.select("solo")

        outcome = engine.enable()

        assert engine.get_state() is True
        assert outcome.shuffled_playlist is None

    def test_enable_failed_flag_write(self, engine, store) -> None:
        store.fail_saves = True

        with pytest.raises(PersistenceError):
            engine.enable()
        assert engine.get_state() is False

    def test_enable_failed_playlist_write_restores_flag(
        self, engine, catalog, cursor, store
    ) -> None:
        cursor.select("road-trip")
        cursor.start_playback("road-trip")
        cursor.next()
        playlist = catalog.get("road-trip")
        before = (list(playlist.tracks), playlist.modified)
        store.failing_keys.add("road-trip")

        with pytest.raises(PersistenceError):
            engine.enable()

        assert engine.get_state() is False
        assert json.loads(store.documents[SHUFFLE_STATE_KEY]) == {"enabled": False}
        assert playlist.tracks == before[0]
        assert playlist.modified == before[1]
        assert playlist.shuffled is False
        assert playlist.original_track_order == []
        assert cursor.current().path == "B.mp3"

    def test_disable_restores_every_shuffled_playlist(self, engine, road_trip) -> None:
        road_trip.create("other")
        for path in ("D.mp3", "E.mp3"):
            road_trip.add_track("other", path)
        engine.shuffle_playlist("road-trip")
        engine.shuffle_playlist("other")
        engine.enable()

        restored = engine.disable()

        assert restored == 2
        assert engine.get_state() is False
        assert track_paths(road_trip.catalog.get("road-trip").tracks) == [
            "A.mp3",
            "B.mp3",
            "C.mp3",
        ]
        assert track_paths(road_trip.catalog.get("other").tracks) == ["D.mp3", "E.mp3"]

    def test_disable_resets_cursor(self, engine, cursor) -> None:
        cursor.select("road-trip")
        cursor.start_playback("road-trip")
        engine.enable()

        engine.disable()

        assert cursor.current_track_index == UNSET

    def test_flag_document_persisted(self, engine, store) -> None:
        engine.enable()
        assert json.loads(store.documents[SHUFFLE_STATE_KEY]) == {"enabled": True}

        engine.disable()
        assert json.loads(store.documents[SHUFFLE_STATE_KEY]) == {"enabled": False}


class TestLoad:
    """Tests for reading the persisted flag."""

    def test_missing_document_writes_default(self, store, catalog, cursor) -> None:
        store.documents.pop(SHUFFLE_STATE_KEY, None)
        engine = ShuffleEngine(store, catalog, cursor)

        assert engine.load() is False
        assert json.loads(store.documents[SHUFFLE_STATE_KEY]) == {"enabled": False}

    def test_reads_enabled_flag(self, store, catalog, cursor) -> None:
        store.documents[SHUFFLE_STATE_KEY] = b'{"enabled": true}'
        engine = ShuffleEngine(store, catalog, cursor)

        assert engine.load() is True

    def test_unreadable_document_means_off(self, store, catalog, cursor) -> None:
        store.documents[SHUFFLE_STATE_KEY] = b"garbage"
        engine = ShuffleEngine(store, catalog, cursor)

        assert engine.load() is False
