"""
Command routing for tunedeck.

Routes user commands to appropriate handler functions.
"""

from typing import List, Tuple

from loguru import logger

from tunedeck.context import AppContext
from tunedeck.core.output import log

# Import command handlers
from tunedeck.commands import playback
from tunedeck.commands import playlist

HELP_TEXT = """
tunedeck - Terminal playlist player

Playlist Commands:
  playlist -n <name>              Create a new playlist
  playlist -add <playlist> <song> Add a song to a playlist
  playlist -list                  List all playlists
  playlist -show <name>           Show playlist tracks
  playlist -rm <playlist> <n>     Remove track number n from a playlist
  playlist -del <name>            Delete a playlist
  playlist <name>                 Select a playlist
  add <song>                      Add a song to the selected playlist
  list                            List songs in the songs directory

Playback Commands:
  play                            Play the selected playlist from the start
  next                            Next track (wraps to the first)
  prev                            Previous track (wraps to the last)
  current                         Show the current track
  stop                            Reset the playback position

Shuffle Commands:
  shuffle                         Toggle shuffle mode
  shuffle on                      Enable shuffle (shuffles the selected playlist)
  shuffle off                     Disable shuffle (restores original order)
  shuffle playlist <name>         Shuffle one playlist
  unshuffle <name>                Restore one playlist's original order

  help                            Show this help message
  quit, exit                      Exit the program

Songs can be given as a number from 'list', a file path, or part of a file
name. Quote names that contain spaces: playlist -add "Road Trip" 3
"""


def print_help() -> None:
    """Display help information for available commands."""
    log(HELP_TEXT.strip(), "info")


def handle_command(ctx: AppContext, command: str, args: List[str]) -> Tuple[AppContext, bool]:
    """
    Handle a single command with explicit state passing.

    Args:
        ctx: Application context
        command: Command name
        args: Command arguments

    Returns:
        (updated_context, should_continue) - Updated context and whether to continue
    """
    logger.debug(f"Command: {command} {args}")

    if command in ['quit', 'exit']:
        log("Goodbye!", "info")
        return ctx, False

    elif command == 'help':
        print_help()
        return ctx, True

    elif command == 'playlist':
        return playlist.handle_playlist_command(ctx, args)

    elif command == 'add':
        return playlist.handle_add_command(ctx, args)

    elif command == 'list':
        return playlist.handle_list_command(ctx)

    elif command == 'play':
        return playback.handle_play_command(ctx)

    elif command == 'next':
        return playback.handle_next_command(ctx)

    elif command in ['prev', 'previous']:
        return playback.handle_previous_command(ctx)

    elif command in ['current', 'status']:
        return playback.handle_current_command(ctx)

    elif command == 'stop':
        return playback.handle_stop_command(ctx)

    elif command == 'shuffle':
        return playback.handle_shuffle_command(ctx, args)

    elif command == 'unshuffle':
        return playback.handle_unshuffle_command(ctx, args)

    elif command == '':
        # Empty command, do nothing
        return ctx, True

    else:
        log(f"Unknown command: '{command}'. Type 'help' for available commands.", "warning")
        return ctx, True
