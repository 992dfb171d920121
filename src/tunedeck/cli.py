"""
tunedeck CLI - Entry point

Runs the interactive prompt, or a single command when one is given:

    tunedeck
    tunedeck playlist -n "Road Trip"
    tunedeck --data-dir ./playlists playlist -list
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tunedeck import __version__
from tunedeck.core import config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tunedeck",
        description="Terminal playlist player: manage playlists, shuffle and playback order",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml (default: ./config.toml or ~/.config/tunedeck/config.toml)",
    )
    parser.add_argument(
        "--data-dir",
        help="Directory holding playlist documents",
    )
    parser.add_argument(
        "--songs-dir",
        help="Directory listed by 'list' and used to resolve song names",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level for the log file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Also write log output to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Run a single command and exit (e.g. 'playlist -list')",
    )
    return parser


def apply_arguments(current_config: config.Config, args: argparse.Namespace) -> config.Config:
    """Command-line flags override config file and environment values."""
    if args.data_dir:
        current_config.storage.data_dir = args.data_dir
    if args.songs_dir:
        current_config.music.songs_dir = args.songs_dir
    if args.log_level:
        current_config.logging.level = args.log_level
    if args.verbose:
        current_config.logging.console_output = True
    return current_config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    current_config = apply_arguments(config.load_config(args.config), args)

    from tunedeck.main import main as run

    return run(current_config, command_words=args.command)


if __name__ == "__main__":
    sys.exit(main())
