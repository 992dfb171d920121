"""
Playback command handlers for tunedeck.

Handles: play, next, prev, current, stop, shuffle, unshuffle. Audio output
belongs to the host; these handlers only move the playlist cursor and report
which track should be playing.
"""

from typing import List, Tuple

from tunedeck.context import AppContext
from tunedeck.core.output import log


def handle_play_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle play command - start the selected playlist from its first track.

    Args:
        ctx: Application context

    Returns:
        (updated_context, should_continue)
    """
    session = ctx.session
    if session.selected_playlist is None:
        log("No playlist selected", "error")
        log('Use "playlist <name>" to select a playlist first', "info")
        return ctx, True

    result = session.start_playback(session.selected_playlist)
    if not result.success:
        log(result.message, "warning")
        return ctx, True

    track = result["track"]
    log(f"Playing playlist: {session.selected_playlist}", "success")
    log(f"Now playing: {track.title}", "success")
    log(f"Tracks in queue: {result['remaining'] + 1}", "info")
    return ctx, True


def handle_next_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    result = ctx.session.next()
    if not result.success:
        log(result.message, "warning")
        return ctx, True

    log(result.message, "success")
    return ctx, True


def handle_previous_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    result = ctx.session.previous()
    if not result.success:
        log(result.message, "warning")
        return ctx, True

    log(result.message, "success")
    return ctx, True


def handle_current_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle current/status command - show the track under the cursor."""
    session = ctx.session
    shuffle_state = "on" if session.shuffle.get_state() else "off"

    result = session.current()
    if not result.success:
        log("No music is currently playing", "info")
        log(f"Shuffle: {shuffle_state}", "info")
        return ctx, True

    track = result["track"]
    log(f"Now playing: {track.title}", "success")
    log(f"    Path: {track.path}", "info")
    log(f"Playlist: {session.selected_playlist}", "info")
    log(f"Remaining: {result['remaining']}", "info")
    log(f"Shuffle: {shuffle_state}", "info")
    return ctx, True


def handle_stop_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle stop command - forget the playback position."""
    ctx.session.reset_cursor()
    log("Playback stopped", "info")
    return ctx, True


def handle_shuffle_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Handle shuffle command - toggle or set shuffle mode, or shuffle one playlist.

    Args:
        ctx: Application context
        args: Command arguments (optional: 'on', 'off' or 'playlist <name>')

    Returns:
        (updated_context, should_continue)
    """
    session = ctx.session

    if not args:
        # Toggle current mode
        if session.shuffle.get_state():
            return _disable_shuffle(ctx)
        return _enable_shuffle(ctx)

    subcommand = args[0].lower()
    if subcommand == "on":
        return _enable_shuffle(ctx)
    elif subcommand == "off":
        return _disable_shuffle(ctx)
    elif subcommand == "playlist":
        name = " ".join(args[1:])
        if not name:
            log("Usage: shuffle playlist <name>", "error")
            return ctx, True

        # Keep the playing track first when shuffling the selected playlist
        anchor = session.cursor.current() if session.cursor.is_selected(name) else None
        result = session.shuffle_playlist(name, anchor_track=anchor)
        log(result.message, "success" if result.success else "error")
        return ctx, True
    else:
        log(f"Unknown shuffle command: {subcommand}", "error")
        log("Usage: shuffle | shuffle on | shuffle off | shuffle playlist <name>", "info")
        return ctx, True


def handle_unshuffle_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    name = " ".join(args)
    if not name:
        log("Usage: unshuffle <name>", "error")
        return ctx, True

    result = ctx.session.unshuffle_playlist(name)
    if not result.success:
        log(result.message, "warning")
    elif not result["persisted"]:
        log(result.message, "warning")
    else:
        log(result.message, "success")
    return ctx, True


def _enable_shuffle(ctx: AppContext) -> Tuple[AppContext, bool]:
    result = ctx.session.enable_shuffle()
    if not result.success:
        log(result.message, "error")
        return ctx, True

    log("Shuffle enabled", "success")
    if result["shuffled_playlist"]:
        log(
            f'Shuffled {result["track_count"]} songs in playlist '
            f'"{result["shuffled_playlist"]}"',
            "info",
        )
    return ctx, True


def _disable_shuffle(ctx: AppContext) -> Tuple[AppContext, bool]:
    result = ctx.session.disable_shuffle()
    if not result.success:
        log(result.message, "error")
        return ctx, True

    log("Shuffle disabled", "success")
    if result["restored_count"] > 0:
        log(
            f"Restored original order for {result['restored_count']} playlist(s)",
            "info",
        )
    return ctx, True
