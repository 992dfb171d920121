"""
tunedeck - Main entry point and interactive loop
"""

import sys
from typing import List, Optional

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from tunedeck import router
from tunedeck.completers import TunedeckCompleter
from tunedeck.context import AppContext
from tunedeck.core import config
from tunedeck.core.console import get_console
from tunedeck.core.output import setup_loguru
from tunedeck.session import PlaylistSession
from tunedeck.utils import parsers


def bootstrap(current_config: config.Config) -> AppContext:
    """Set up logging and storage, then load the playlist session."""
    config.ensure_directories(current_config)
    setup_loguru(
        config.get_log_file_path(current_config),
        level=current_config.logging.level,
        max_file_size_mb=current_config.logging.max_file_size_mb,
        backup_count=current_config.logging.backup_count,
        console_output=current_config.logging.console_output,
    )

    session = PlaylistSession.from_config(current_config)
    return AppContext.create(current_config, session=session, console=get_console())


def run_command(ctx: AppContext, words: List[str]) -> AppContext:
    """Run one command given as separate words (from the shell).

    The shell has already grouped quoted words, so they go to the router
    as they are instead of through parse_command.
    """
    if not words:
        return ctx
    ctx, _ = router.handle_command(ctx, words[0].lower(), list(words[1:]))
    return ctx


def interactive_mode(ctx: AppContext) -> None:
    """Run the interactive command loop."""
    console = ctx.console or get_console()
    history_path = config.get_data_dir() / "history"

    prompt_session: PromptSession = PromptSession(
        history=FileHistory(str(history_path)),
        completer=TunedeckCompleter(ctx.session),
    )

    console.print("[bold green]Welcome to tunedeck![/bold green]")
    console.print("Type 'help' for available commands, or 'quit' to exit.")
    console.print()

    should_continue = True
    while should_continue:
        user_input = ""
        try:
            user_input = prompt_session.prompt("tunedeck> ").strip()
            command, args = parsers.parse_command(user_input)

            # Execute command with context
            ctx, should_continue = router.handle_command(ctx, command, args)

        except KeyboardInterrupt:
            console.print("\n[yellow]Use 'quit' or 'exit' to leave gracefully.[/yellow]")
        except EOFError:
            console.print("\n[green]Goodbye![/green]")
            break
        except Exception as e:
            # Keep the session alive; the traceback goes to the log file
            logger.exception(f"Command failed: {user_input}")
            console.print(f"[red]An unexpected error occurred: {e}[/red]")


def main(
    current_config: Optional[config.Config] = None,
    command_words: Optional[List[str]] = None,
) -> int:
    """Load configuration and either run one command or the interactive loop.

    Returns:
        Exit code
    """
    current_config = current_config or config.load_config()

    try:
        ctx = bootstrap(current_config)
    except OSError as e:
        get_console().print(f"[red]Could not open playlist storage: {e}[/red]")
        return 1

    if command_words:
        run_command(ctx, command_words)
        return 0

    interactive_mode(ctx)
    return 0


if __name__ == "__main__":
    sys.exit(main())
