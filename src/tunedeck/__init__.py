"""tunedeck - playlist management core for a terminal music player."""

__version__ = "0.1.0"
