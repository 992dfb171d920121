"""Library domain - the songs directory.

This domain handles:
- Listing audio files available for playlists
- Resolving user song references to file paths
"""

from .scanner import (
    SongFile,
    is_supported_format,
    list_audio_files,
    resolve_song_path,
)

__all__ = [
    "SongFile",
    "is_supported_format",
    "list_audio_files",
    "resolve_song_path",
]
