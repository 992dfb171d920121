"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Document storage (JSON files)
- Console and log output (Rich, Loguru)

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    load_config,
    save_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_playlists_dir,
    get_log_file_path,
    create_default_config,
    ensure_directories,
)

# Storage
from .storage import (
    DocumentStore,
    JsonDocumentStore,
    path_exists,
)

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_playlists_dir",
    "get_log_file_path",
    "create_default_config",
    "ensure_directories",
    "DocumentStore",
    "JsonDocumentStore",
    "path_exists",
]
