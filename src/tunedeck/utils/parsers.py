"""
Prompt line parsing for tunedeck.

Playlist names and song names often contain spaces, so the prompt accepts
them in single or double quotes: playlist -add "Road Trip" "Night Drive.mp3"
"""

from typing import List

QUOTE_CHARS = ('"', "'")


def parse_quoted_args(args: List[str]) -> List[str]:
    """
    Rejoin whitespace-split words that belong to one quoted argument.

    A quote opened in one word runs until a word ending in the same quote
    character. An unterminated quote keeps everything up to the end of line.

    Example:
        ['-add', '"Road', 'Trip"', '3'] -> ['-add', 'Road Trip', '3']
    """
    parsed: List[str] = []
    words = iter(args)

    for word in words:
        if not word or word[0] not in QUOTE_CHARS:
            parsed.append(word)
            continue

        quote = word[0]
        if len(word) > 1 and word.endswith(quote):
            parsed.append(word[1:-1])
            continue

        group = [word[1:]]
        for inner in words:
            if inner.endswith(quote):
                group.append(inner[:-1])
                break
            group.append(inner)
        parsed.append(" ".join(group))

    return parsed


def parse_command(user_input: str) -> tuple[str, List[str]]:
    """Split a prompt line into a lowercase command and its arguments."""
    command, *rest = user_input.split() or [""]
    return command.lower(), parse_quoted_args(rest)
