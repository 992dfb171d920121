"""
Songs directory scanning and song reference resolution.

Handles listing audio files in the songs directory and turning what a user
typed (a list number, a path, or part of a file name) into a file path.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SongFile:
    """An audio file found in the songs directory."""

    name: str
    path: str


def is_supported_format(local_path: Path, supported_formats: list[str]) -> bool:
    """Check if file format is supported."""
    return local_path.suffix.lower() in supported_formats


def list_audio_files(songs_dir: Path, supported_formats: list[str]) -> list[SongFile]:
    """Audio files directly inside songs_dir, sorted by name.

    A missing directory yields an empty list.
    """
    if not songs_dir.is_dir():
        return []

    return [
        SongFile(name=entry.name, path=str(entry))
        for entry in sorted(songs_dir.iterdir(), key=lambda p: p.name.lower())
        if entry.is_file() and is_supported_format(entry, supported_formats)
    ]


def resolve_song_path(
    identifier: str,
    songs_dir: Path,
    supported_formats: list[str],
    cwd: Optional[Path] = None,
) -> Optional[str]:
    """Resolve a song reference to a file path.

    Tried in order:
    1. 1-based number from the 'list' command
    2. Existing path (made absolute)
    3. Path relative to the songs directory
    4. Path relative to the current directory
    5. Case-insensitive partial match on file names in the songs directory

    Returns:
        File path, or None if nothing matches
    """
    cwd = cwd or Path.cwd()
    audio_files = list_audio_files(songs_dir, supported_formats)

    if identifier.isdigit():
        index = int(identifier)
        if 0 < index <= len(audio_files):
            return audio_files[index - 1].path

    direct = Path(identifier).expanduser()
    if direct.is_file():
        return str(direct.resolve())

    in_songs_dir = songs_dir / identifier
    if in_songs_dir.is_file():
        return str(in_songs_dir)

    in_cwd = cwd / identifier
    if in_cwd.is_file():
        return str(in_cwd)

    needle = identifier.lower()
    for song in audio_files:
        if needle in song.name.lower():
            return song.path

    return None
