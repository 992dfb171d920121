"""Application context for explicit state passing.

AppContext carries the configuration and the playlist session to every
command handler, so no handler reaches for module-level state.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from tunedeck.core.config import Config
from tunedeck.session import PlaylistSession


@dataclass(frozen=True)
class AppContext:
    """Application context passed to all command handlers.

    Attributes:
        config: Application configuration
        session: Playlist catalog, selection and shuffle state
        console: Rich Console for formatted output
    """

    config: Config
    session: PlaylistSession
    console: Optional[Console] = None

    @classmethod
    def create(
        cls,
        config: Config,
        session: Optional[PlaylistSession] = None,
        console: Optional[Console] = None,
    ) -> "AppContext":
        """Create initial application context.

        Args:
            config: Application configuration
            session: Existing session; one is opened from config if omitted
            console: Optional Rich Console instance

        Returns:
            New AppContext
        """
        if session is None:
            session = PlaylistSession.from_config(config)
        return cls(config=config, session=session, console=console)

    @property
    def songs_dir(self) -> Path:
        return Path(self.config.music.songs_dir).expanduser()
