"""Playlist-specific exceptions for error handling."""


class PlaylistError(Exception):
    """Base exception for playlist operations."""

    pass


class ValidationError(PlaylistError):
    """Raised when input is empty or malformed."""

    pass


class NotFoundError(PlaylistError):
    """Raised when no playlist has the given name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Playlist "{name}" not found')


class DuplicateError(PlaylistError):
    """Raised when creating a playlist whose name is taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Playlist "{name}" already exists')


class DuplicateTrackError(PlaylistError):
    """Raised when the track path is already in the playlist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("Song already in playlist")


class SourceMissingError(PlaylistError):
    """Raised when the referenced media file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Song file not found: {path}")


class TrackIndexError(PlaylistError):
    """Raised when a 1-based track position is out of range."""

    def __init__(self, index: int, track_count: int):
        self.index = index
        self.track_count = track_count
        super().__init__(f"Invalid track index: {index}")


class EmptyError(PlaylistError):
    """Raised when shuffling a playlist with no tracks."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Playlist "{name}" is empty')


class SingleTrackError(PlaylistError):
    """Raised when shuffling a playlist with exactly one track."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Playlist "{name}" has only one track, nothing to shuffle')


class NotShuffledError(PlaylistError):
    """Raised when restoring order on a playlist that is not shuffled."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Playlist "{name}" is not shuffled')


class PersistenceError(PlaylistError):
    """Raised when a document write or delete fails."""

    pass
