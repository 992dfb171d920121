"""Shared fixtures: an in-memory document store with write-failure injection."""

import random
from typing import Optional

import pytest

from tunedeck.session import PlaylistSession


class MemoryStore:
    """DocumentStore kept in a dict.

    Set fail_saves / fail_deletes to simulate reported write failures, or add
    keys to failing_keys to fail saves of those documents only.
    """

    def __init__(self) -> None:
        self.documents: dict[str, bytes] = {}
        self.fail_saves = False
        self.fail_deletes = False
        self.failing_keys: set[str] = set()
        self.save_calls = 0

    def load_document(self, key: str) -> Optional[bytes]:
        return self.documents.get(key)

    def save_document(self, key: str, data: bytes) -> bool:
        self.save_calls += 1
        if self.fail_saves or key in self.failing_keys:
            return False
        self.documents[key] = data
        return True

    def delete_document(self, key: str) -> bool:
        if self.fail_deletes:
            return False
        self.documents.pop(key, None)
        return True

    def list_keys(self) -> list[str]:
        return list(self.documents)


class FakeFiles:
    """Resource-existence check over a fixed set of paths."""

    def __init__(self, *paths: str) -> None:
        self.paths = set(paths)

    def add(self, *paths: str) -> None:
        self.paths.update(paths)

    def __call__(self, path: str) -> bool:
        return path in self.paths


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def files() -> FakeFiles:
    return FakeFiles("A.mp3", "B.mp3", "C.mp3", "D.mp3", "E.mp3")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def session(store: MemoryStore, files: FakeFiles, rng: random.Random) -> PlaylistSession:
    session = PlaylistSession(store, exists=files, rng=rng)
    session.load()
    return session


@pytest.fixture
def road_trip(session: PlaylistSession) -> PlaylistSession:
    """Session with a 'road-trip' playlist holding A, B, C."""
    session.create("road-trip")
    for path in ("A.mp3", "B.mp3", "C.mp3"):
        session.add_track("road-trip", path)
    return session
