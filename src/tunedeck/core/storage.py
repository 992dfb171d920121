"""
Document storage for playlist data.

The playlist core only needs four primitives from its host: load, save,
delete and list named documents. JsonDocumentStore implements them with one
JSON file per document in a data directory.
"""

import os
from pathlib import Path
from typing import List, Optional, Protocol
from urllib.parse import quote, unquote

from loguru import logger

DOCUMENT_SUFFIX = ".json"

# Reserved document holding the global shuffle flag
SHUFFLE_STATE_KEY = "__shuffle_state__"
RESERVED_KEYS = frozenset({SHUFFLE_STATE_KEY})


class DocumentStore(Protocol):
    """Persistence capability consumed by the playlist core."""

    def load_document(self, key: str) -> Optional[bytes]:
        """Return the stored bytes for key, or None when absent."""
        ...

    def save_document(self, key: str, data: bytes) -> bool:
        """Write data under key. Returns False on a reported write failure."""
        ...

    def delete_document(self, key: str) -> bool:
        """Remove key. Deleting an absent key succeeds."""
        ...

    def list_keys(self) -> List[str]:
        """Keys of every stored document."""
        ...


def path_exists(path: str) -> bool:
    """Default resource-existence check for track sources."""
    return Path(path).exists()


def key_to_filename(key: str) -> str:
    """Map a document key to a safe file name.

    Path separators and other reserved characters are percent-encoded so any
    playlist name maps to exactly one file inside the data directory.
    """
    return quote(key, safe=" -_()&',!") + DOCUMENT_SUFFIX


def filename_to_key(filename: str) -> str:
    """Inverse of key_to_filename."""
    return unquote(filename[: -len(DOCUMENT_SUFFIX)])


class JsonDocumentStore:
    """File-backed DocumentStore, one UTF-8 JSON file per key.

    Writes go to a temp file that atomically replaces the target, so a crash
    mid-write never leaves a truncated document behind.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        return self.root / key_to_filename(key)

    def load_document(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def save_document(self, key: str, data: bytes) -> bool:
        path = self._path_for(key)
        temp_path = path.with_name(path.name + ".tmp")
        try:
            self.ensure_root()
            temp_path.write_bytes(data)
            os.replace(temp_path, path)
            return True
        except OSError as e:
            logger.error(f"Error saving document '{key}' to {path}: {e}")
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning(f"Could not remove temp file {temp_path}")
            return False

    def delete_document(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.error(f"Error deleting document '{key}' at {path}: {e}")
            return False

    def list_keys(self) -> List[str]:
        if not self.root.exists():
            return []
        return sorted(
            filename_to_key(entry.name)
            for entry in self.root.iterdir()
            if entry.is_file() and entry.name.endswith(DOCUMENT_SUFFIX)
        )
