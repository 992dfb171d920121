"""
Configuration management for tunedeck
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class StorageConfig:
    """Configuration for playlist document storage."""

    data_dir: Optional[str] = None  # Default: ~/.local/share/tunedeck/playlists


@dataclass
class MusicConfig:
    """Configuration for the songs directory used to resolve track references."""

    songs_dir: str = "songs"
    supported_formats: List[str] = field(
        default_factory=lambda: [".mp3", ".wav", ".ogg", ".flac", ".m4a"]
    )

    def validate(self) -> None:
        """Validate music configuration values.

        Raises:
            ValueError: If a format is not a dotted file extension
        """
        invalid = [fmt for fmt in self.supported_formats if not fmt.startswith(".")]
        if invalid:
            raise ValueError(
                f"Invalid supported formats: {invalid}. "
                "Formats must be file extensions such as '.mp3'"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/tunedeck/tunedeck.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of rotated files to keep
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    music: MusicConfig = field(default_factory=MusicConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunedeck"
    return Path.home() / ".config" / "tunedeck"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the current working directory first, then
    falls back to XDG_CONFIG_HOME/tunedeck (or ~/.config/tunedeck).
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunedeck"
    return Path.home() / ".local" / "share" / "tunedeck"


def get_playlists_dir(config: Config) -> Path:
    """Directory holding one JSON document per playlist."""
    if config.storage.data_dir:
        return Path(config.storage.data_dir).expanduser()
    return get_data_dir() / "playlists"


def get_log_file_path(config: Config) -> Path:
    """Log file location, honouring a configured override."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "tunedeck.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# tunedeck Configuration

[storage]
# Directory for playlist documents (defaults to ~/.local/share/tunedeck/playlists)
# data_dir = "~/Music/playlists"

[music]
# Directory scanned by the 'list' command and used to resolve song names
songs_dir = "songs"

# Audio file extensions recognised in the songs directory
supported_formats = [".mp3", ".wav", ".ogg", ".flac", ".m4a"]

[logging]
# Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
level = "INFO"

# Rotate the log file after this many megabytes
max_file_size_mb = 10

# Number of rotated log files to keep
backup_count = 5

# Also log to stderr
console_output = false
""".lstrip()


def _apply_env_overrides(config: Config) -> Config:
    """Environment variables override TOML values."""
    data_dir = os.environ.get("TUNEDECK_DATA_DIR")
    songs_dir = os.environ.get("TUNEDECK_SONGS_DIR")
    log_level = os.environ.get("TUNEDECK_LOG_LEVEL")

    if data_dir:
        config.storage.data_dir = data_dir
    if songs_dir:
        config.music.songs_dir = songs_dir
    if log_level:
        config.logging.level = log_level.upper()

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - TUNEDECK_DATA_DIR
    - TUNEDECK_SONGS_DIR
    - TUNEDECK_LOG_LEVEL
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        # Create config directory and default file
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        config = Config()

        if "storage" in toml_data:
            storage_data = toml_data["storage"]
            config.storage = StorageConfig(
                data_dir=storage_data.get("data_dir"),
            )

        if "music" in toml_data:
            music_data = toml_data["music"]
            config.music = MusicConfig(
                songs_dir=music_data.get("songs_dir", config.music.songs_dir),
                supported_formats=[
                    fmt.lower()
                    for fmt in music_data.get(
                        "supported_formats", config.music.supported_formats
                    )
                ],
            )
            config.music.validate()

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level),
                log_file=logging_data.get("log_file"),
                max_file_size_mb=logging_data.get(
                    "max_file_size_mb", config.logging.max_file_size_mb
                ),
                backup_count=logging_data.get(
                    "backup_count", config.logging.backup_count
                ),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

        return _apply_env_overrides(config)

    except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return _apply_env_overrides(Config())


def save_config(config: Config, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    config_path = config_path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        toml_content = "# tunedeck Configuration\n\n[storage]"
        if config.storage.data_dir:
            toml_content += f'\ndata_dir = "{config.storage.data_dir}"'

        toml_content += f"""

[music]
songs_dir = "{config.music.songs_dir}"
supported_formats = {config.music.supported_formats!r}

[logging]
level = "{config.logging.level}"
max_file_size_mb = {config.logging.max_file_size_mb}
backup_count = {config.logging.backup_count}
console_output = {str(config.logging.console_output).lower()}"""

        if config.logging.log_file:
            toml_content += f'\nlog_file = "{config.logging.log_file}"'

        toml_content += "\n"

        with open(config_path, "w", encoding="utf-8") as f:
            f.write(toml_content)

        return True

    except OSError as e:
        print(f"Error saving configuration to {config_path}: {e}")
        return False


def ensure_directories(config: Config) -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
    get_playlists_dir(config).mkdir(parents=True, exist_ok=True)
    get_log_file_path(config).parent.mkdir(parents=True, exist_ok=True)
