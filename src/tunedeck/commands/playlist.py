"""
Playlist command handlers for tunedeck.

Handles: playlist -n, playlist -add, playlist -list, playlist -show,
         playlist -rm, playlist -del, playlist <name>, add, list
"""

from typing import List, Tuple

from tunedeck.context import AppContext
from tunedeck.core.output import log
from tunedeck.domain import library
from tunedeck.domain.playlists.models import OperationResult


def _report(result: OperationResult) -> None:
    log(result.message, "success" if result.success else "error")


def _resolve_song(ctx: AppContext, identifier: str) -> str | None:
    resolved = library.resolve_song_path(
        identifier, ctx.songs_dir, ctx.config.music.supported_formats
    )
    if resolved is None:
        log(f"Song not found: {identifier}", "error")
        log('Tip: Use "list" to see available songs', "info")
    return resolved


def handle_playlist_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Dispatch 'playlist' flags; a bare name selects that playlist.

    Args:
        ctx: Application context
        args: Command arguments

    Returns:
        (updated_context, should_continue)
    """
    if not args:
        log("Usage: playlist <name> or playlist -list", "error")
        return ctx, True

    flag, rest = args[0], args[1:]
    if flag == "-n":
        return handle_playlist_new_command(ctx, rest)
    elif flag == "-add":
        return handle_playlist_add_command(ctx, rest)
    elif flag == "-list":
        return handle_playlist_list_command(ctx)
    elif flag == "-show":
        return handle_playlist_show_command(ctx, rest)
    elif flag == "-rm":
        return handle_playlist_remove_command(ctx, rest)
    elif flag == "-del":
        return handle_playlist_delete_command(ctx, rest)
    else:
        return handle_playlist_select_command(ctx, args)


def handle_playlist_new_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    name = " ".join(args)
    if not name:
        log("Usage: playlist -n <name>", "error")
        return ctx, True

    _report(ctx.session.create(name))
    return ctx, True


def handle_playlist_add_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    if len(args) < 2:
        log("Usage: playlist -add <playlist> <song>", "error")
        return ctx, True

    playlist_name, song = args[0], " ".join(args[1:])
    song_path = _resolve_song(ctx, song)
    if song_path is None:
        return ctx, True

    _report(ctx.session.add_track(playlist_name, song_path))
    return ctx, True


def handle_playlist_list_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    playlists = ctx.session.list()["playlists"]

    if not playlists:
        log("No playlists found", "info")
        log("Create one with: playlist -n <name>", "info")
        return ctx, True

    log(f"Found {len(playlists)} playlist(s):", "info")
    for summary in playlists:
        selected = " [SELECTED]" if summary.is_selected else ""
        log(f"  {summary.name}{selected}", "success")
        log(f"    Tracks: {summary.track_count}", "info")
        log(f"    Created: {summary.created.astimezone():%Y-%m-%d %H:%M}", "info")
    return ctx, True


def handle_playlist_show_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    name = " ".join(args)
    if not name:
        log("Usage: playlist -show <name>", "error")
        return ctx, True

    result = ctx.session.show(name)
    if not result.success:
        _report(result)
        return ctx, True

    playlist = result["playlist"]
    shuffled = " (shuffled)" if playlist.shuffled else ""
    log(f"Playlist: {playlist.name}{shuffled}", "info")
    log(f"Tracks: {len(playlist.tracks)}", "info")
    log(f"Created: {playlist.created.astimezone():%Y-%m-%d %H:%M}", "info")

    if not playlist.tracks:
        log("No tracks in playlist", "info")
        return ctx, True

    for position, track in enumerate(playlist.tracks, start=1):
        log(f"[{position}] {track.title}", "success")
        log(f"    Path: {track.path}", "info")
    return ctx, True


def handle_playlist_remove_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    if len(args) < 2 or not args[-1].lstrip("-").isdigit():
        log("Usage: playlist -rm <playlist> <track-number>", "error")
        return ctx, True

    playlist_name = " ".join(args[:-1])
    _report(ctx.session.remove_track(playlist_name, int(args[-1])))
    return ctx, True


def handle_playlist_delete_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    name = " ".join(args)
    if not name:
        log("Usage: playlist -del <name>", "error")
        return ctx, True

    _report(ctx.session.delete(name))
    return ctx, True


def handle_playlist_select_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    _report(ctx.session.select(" ".join(args)))
    return ctx, True


def handle_add_command(ctx: AppContext, args: List[str]) -> Tuple[AppContext, bool]:
    """Handle add command - add a song to the selected playlist."""
    song = " ".join(args)
    if not song:
        log("Usage: add <song>", "error")
        log('Note: You must select a playlist first with "playlist <name>"', "info")
        return ctx, True

    song_path = _resolve_song(ctx, song)
    if song_path is None:
        return ctx, True

    _report(ctx.session.add_to_selected(song_path))
    return ctx, True


def handle_list_command(ctx: AppContext) -> Tuple[AppContext, bool]:
    """Handle list command - number the audio files in the songs directory."""
    songs = library.list_audio_files(ctx.songs_dir, ctx.config.music.supported_formats)
    if not songs:
        log(f"No audio files found in {ctx.songs_dir}", "info")
        return ctx, True

    log(f"Found {len(songs)} song(s):", "info")
    for position, song in enumerate(songs, start=1):
        log(f"  [{position}] {song.name}", "info")
    return ctx, True
