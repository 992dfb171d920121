"""Tests for the PlaylistSession operation surface."""

from tunedeck.domain.playlists.exceptions import (
    DuplicateTrackError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from tunedeck.session import NO_SELECTION_MESSAGE, PlaylistSession


class TestCatalogOperations:
    """Results returned by catalog operations."""

    def test_create_reports_success(self, session) -> None:
        result = session.create("road-trip")

        assert result.success is True
        assert result.message == 'Playlist "road-trip" created successfully'
        assert result["playlist"].name == "road-trip"

    def test_duplicate_track_reported_not_raised(self, road_trip) -> None:
        result = road_trip.add_track("road-trip", "A.mp3")

        assert result.success is False
        assert isinstance(result.error, DuplicateTrackError)
        assert result.message == "Song already in playlist"

    def test_add_track_message(self, road_trip) -> None:
        result = road_trip.add_track("road-trip", "D.mp3")

        assert result.message == 'Added "D.mp3" to playlist "road-trip"'
        assert result["track"].path == "D.mp3"

    def test_add_to_selected_without_selection(self, road_trip) -> None:
        result = road_trip.add_to_selected("D.mp3")

        assert result.success is False
        assert isinstance(result.error, ValidationError)
        assert result.message == NO_SELECTION_MESSAGE

    def test_add_to_selected(self, road_trip) -> None:
        road_trip.select("road-trip")

        result = road_trip.add_to_selected("D.mp3")

        assert result.success is True
        assert len(road_trip.show("road-trip")["playlist"].tracks) == 4

    def test_failed_write_reported(self, road_trip, store) -> None:
        store.fail_saves = True

        result = road_trip.remove_track("road-trip", 1)

        assert result.success is False
        assert isinstance(result.error, PersistenceError)
        assert len(road_trip.show("road-trip")["playlist"].tracks) == 3

    def test_list_marks_selection(self, road_trip) -> None:
        road_trip.create("other")
        road_trip.select("other")

        summaries = road_trip.list()["playlists"]

        assert [(s.name, s.is_selected) for s in summaries] == [
            ("road-trip", False),
            ("other", True),
        ]

    def test_select_unknown(self, session) -> None:
        result = session.select("nope")

        assert result.success is False
        assert isinstance(result.error, NotFoundError)


class TestPlaybackOperations:
    """Results returned by cursor operations."""

    def test_start_playback_defaults_to_selection(self, road_trip) -> None:
        road_trip.select("road-trip")

        result = road_trip.start_playback()

        assert result.success is True
        assert result["track"].path == "A.mp3"
        assert result["remaining"] == 2

    def test_start_playback_without_selection(self, road_trip) -> None:
        result = road_trip.start_playback()

        assert result.success is False
        assert result.message == NO_SELECTION_MESSAGE

    def test_start_playback_empty(self, road_trip) -> None:
        road_trip.create("empty")

        result = road_trip.start_playback("empty")

        assert result.success is False
        assert result["track"] is None
        assert result.message == 'Playlist "empty" is empty'

    def test_next_and_current(self, road_trip) -> None:
        road_trip.select("road-trip")
        road_trip.start_playback()

        assert road_trip.next()["track"].path == "B.mp3"
        assert road_trip.current()["track"].path == "B.mp3"
        assert road_trip.remaining_count()["remaining"] == 1

    def test_current_before_playback(self, road_trip) -> None:
        road_trip.select("road-trip")

        result = road_trip.current()

        assert result.success is False
        assert result.message == "No track is currently playing"

    def test_reset_cursor(self, road_trip) -> None:
        road_trip.select("road-trip")
        road_trip.start_playback()

        assert road_trip.reset_cursor().success is True
        assert road_trip.current().success is False


class TestShuffleOperations:
    """Results returned by shuffle operations."""

    def test_shuffle_state(self, session) -> None:
        assert session.get_shuffle_state()["state"] is False

        session.enable_shuffle()

        assert session.get_shuffle_state()["state"] is True

    def test_enable_reports_shuffled_playlist(self, road_trip) -> None:
        road_trip.select("road-trip")

        result = road_trip.enable_shuffle()

        assert result["shuffled_playlist"] == "road-trip"
        assert result["track_count"] == 3

    def test_disable_reports_restored_count(self, road_trip) -> None:
        road_trip.shuffle_playlist("road-trip")

        result = road_trip.disable_shuffle()

        assert result["restored_count"] == 1

    def test_shuffle_playlist_message(self, road_trip) -> None:
        result = road_trip.shuffle_playlist("road-trip")

        assert result.message == 'Shuffled 3 songs in playlist "road-trip"'
        assert result["track_count"] == 3

    def test_unshuffle_not_saved(self, road_trip, store) -> None:
        road_trip.shuffle_playlist("road-trip")
        store.fail_saves = True

        result = road_trip.unshuffle_playlist("road-trip")

        assert result.success is True
        assert result["persisted"] is False
        assert result.message.endswith("(not saved to disk)")


class TestReload:
    """State written by one session is seen by the next."""

    def test_playlists_and_flag_survive(self, road_trip, store, files) -> None:
        road_trip.select("road-trip")
        road_trip.enable_shuffle()
        shuffled = [t.path for t in road_trip.show("road-trip")["playlist"].tracks]

        reopened = PlaylistSession(store, exists=files)
        reopened.load()

        assert reopened.get_shuffle_state()["state"] is True
        playlist = reopened.show("road-trip")["playlist"]
        assert [t.path for t in playlist.tracks] == shuffled
        assert [t.path for t in playlist.original_track_order] == [
            "A.mp3",
            "B.mp3",
            "C.mp3",
        ]
        # Selection is per session
        assert reopened.selected_playlist is None

    def test_open_over_directory(self, tmp_path, files) -> None:
        first = PlaylistSession.open(tmp_path / "playlists", exists=files)
        first.create("road-trip")
        first.add_track("road-trip", "A.mp3")

        second = PlaylistSession.open(tmp_path / "playlists", exists=files)

        assert [t.path for t in second.show("road-trip")["playlist"].tracks] == ["A.mp3"]
        assert (tmp_path / "playlists" / "__shuffle_state__.json").exists()
