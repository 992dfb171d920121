"""
prompt_toolkit completers for tunedeck
Provides autocomplete for commands and playlist names
"""

from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from tunedeck.session import PlaylistSession

# Commands whose argument is a playlist name
PLAYLIST_ARGUMENT_PREFIXES = (
    "playlist -show ",
    "playlist -del ",
    "playlist -add ",
    "playlist -rm ",
    "shuffle playlist ",
    "unshuffle ",
    "playlist ",
)


class TunedeckCompleter(Completer):
    """
    Command completer with descriptions, plus playlist names after commands
    that take one.
    """

    # Format: 'command': ('icon', 'description')
    COMMANDS = {
        # Playlist commands
        'playlist': ('📋', 'Create, show, select playlists'),
        'add': ('➕', 'Add a song to the selected playlist'),
        'list': ('🎵', 'List songs in the songs directory'),

        # Playback commands
        'play': ('▶', 'Play the selected playlist'),
        'next': ('⏭', 'Next track'),
        'prev': ('⏮', 'Previous track'),
        'current': ('🎧', 'Show the current track'),
        'stop': ('■', 'Reset playback position'),

        # Shuffle commands
        'shuffle': ('🔀', 'Toggle shuffle mode'),
        'unshuffle': ('🔁', 'Restore a playlist order'),

        # System commands
        'help': ('❓', 'Show help'),
        'quit': ('👋', 'Exit tunedeck'),
        'exit': ('👋', 'Exit tunedeck'),
    }

    def __init__(self, session: PlaylistSession):
        self.session = session

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """Generate command or playlist name completions."""
        text = document.text_before_cursor

        for prefix in PLAYLIST_ARGUMENT_PREFIXES:
            if text.lower().startswith(prefix):
                yield from self._playlist_completions(text[len(prefix):])
                return

        if " " in text:
            return

        word = text.lower()
        matches = sorted(
            (command, icon, description)
            for command, (icon, description) in self.COMMANDS.items()
            if command.startswith(word)
        )
        for command, icon, description in matches[:10]:
            yield Completion(
                command,
                start_position=-len(text),
                display=command,
                display_meta=f"{icon}\t{description}",
            )

    def _playlist_completions(self, partial: str) -> Iterable[Completion]:
        needle = partial.strip('"').lower()
        for name in self.session.catalog.names():
            if name.lower().startswith(needle):
                value = f'"{name}"' if " " in name else name
                yield Completion(value, start_position=-len(partial), display=name)
