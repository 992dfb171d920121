"""Tests for prompt completion."""

from prompt_toolkit.document import Document

from tunedeck.completers import TunedeckCompleter


def complete(session, text: str) -> list[str]:
    completer = TunedeckCompleter(session)
    return [c.text for c in completer.get_completions(Document(text), None)]


class TestTunedeckCompleter:
    """Tests for TunedeckCompleter."""

    def test_command_prefix(self, session) -> None:
        assert complete(session, "pl") == ["play", "playlist"]

    def test_playlist_names_after_flag(self, road_trip) -> None:
        road_trip.create("Late Night")
        road_trip.create("rock")

        assert complete(road_trip, "playlist -show r") == ["road-trip", "rock"]
        assert complete(road_trip, "unshuffle la") == ['"Late Night"']

    def test_no_completion_for_other_arguments(self, session) -> None:
        assert complete(session, "next something") == []
