# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating Daybook configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/daybook/  (default: ~/.config/daybook/)
#   - Data:    $XDG_DATA_HOME/daybook/    (default: ~/.local/share/daybook/)
#   - State:   $XDG_STATE_HOME/daybook/   (default: ~/.local/state/daybook/)
#
# Files:
#   - config.toml: User preferences
#   - journal.db: SQLite database (in data directory)
#   - daybook.log: Application log (in state directory)
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "daybook"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for Daybook.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/daybook/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for Daybook.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/daybook/
    This is where the journal database lives.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


def get_xdg_state_home() -> Path:
    """
    Returns the XDG state directory for Daybook.

    Respects $XDG_STATE_HOME if set, otherwise uses ~/.local/state/daybook/
    Logs are written here.
    """
    xdg_state = os.environ.get("XDG_STATE_HOME")
    if xdg_state:
        base = Path(xdg_state)
    else:
        base = Path.home() / ".local" / "state"
    return base / APP_NAME


def ensure_directories() -> dict[str, Path]:
    """
    Creates all required XDG directories if they don't exist.

    Returns:
        Dictionary mapping directory type to path.
    """
    dirs = {
        "config": get_xdg_config_home(),
        "data": get_xdg_data_home(),
        "state": get_xdg_state_home(),
    }

    for dir_path in dirs.values():
        dir_path.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class StorageConfig:
    """
    Configuration for the entry database.

    Attributes:
        database_path: Explicit path to the SQLite file. Empty means the
                       default location in the XDG data directory.
    """
    database_path: str = ""


@dataclass
class UIConfig:
    """
    Configuration for the user interface.

    Attributes:
        theme: Color theme ("dark" or "light").
        preview_length: Characters of entry text shown in the entry table.
        expand_threshold: Entries longer than this get a "see more" hint.
        confirm_delete: Ask before deleting an entry.
    """
    theme: str = "dark"
    preview_length: int = 140
    expand_threshold: int = 20
    confirm_delete: bool = True


@dataclass
class Config:
    """
    Main configuration container for Daybook.

    Usage:
        >>> config = Config.load()
        >>> config.ui.preview_length
        140
    """
    storage: StorageConfig = field(default_factory=StorageConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def default_database_path() -> Path:
        """Returns the default path to the SQLite database."""
        return get_xdg_data_home() / "journal.db"

    @staticmethod
    def log_file_path() -> Path:
        """Returns the path to the application log file."""
        return get_xdg_state_home() / "daybook.log"

    def database_path(self) -> Path:
        """Returns the configured database path, or the default one."""
        if self.storage.database_path:
            return Path(self.storage.database_path).expanduser()
        return self.default_database_path()

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the config file doesn't exist, returns default configuration.

        Args:
            path: Config file to read. Defaults to the XDG location.

        Raises:
            ConfigError: If the config file exists but is invalid.
        """
        config_path = path or cls.config_file_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to the config file.

        Creates the config directory if it doesn't exist.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create a Config object from a dictionary (parsed TOML)."""
        config = cls()

        storage = data.get("storage", {})
        config.storage = StorageConfig(
            database_path=storage.get("database_path", ""),
        )

        ui = data.get("ui", {})
        config.ui = UIConfig(
            theme=ui.get("theme", "dark"),
            preview_length=ui.get("preview_length", 140),
            expand_threshold=ui.get("expand_threshold", 20),
            confirm_delete=ui.get("confirm_delete", True),
        )

        return config

    def _to_dict(self) -> dict[str, Any]:
        """Convert Config to a dictionary for TOML serialization."""
        return {
            "storage": {
                "database_path": self.storage.database_path,
            },
            "ui": {
                "theme": self.ui.theme,
                "preview_length": self.ui.preview_length,
                "expand_threshold": self.ui.expand_threshold,
                "confirm_delete": self.ui.confirm_delete,
            },
        }


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths(config: Config | None = None) -> None:
    """
    Print all XDG paths for debugging.
    Useful for users wondering where their journal is stored.
    """
    config = config or Config()
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print(f"State:   {get_xdg_state_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Database:     {config.database_path()}")
    print(f"Log file:     {Config.log_file_path()}")
