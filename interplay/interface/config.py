"""
User configuration persistence.

Stores settings like the default content file and log level in a JSON file.
"""

import json
from pathlib import Path
from typing import TypedDict


class Config(TypedDict, total=False):
    """User configuration."""
    content_path: str | None  # Default content pack for CLI commands
    state_path: str | None  # Default saved progression file
    log_level: str  # DEBUG, INFO, WARNING, ERROR
    show_hidden: bool  # List unavailable interactions that are not shown greyed out


DEFAULT_CONFIG: Config = {
    "content_path": None,
    "state_path": None,
    "log_level": "WARNING",
    "show_hidden": False,
}


def get_config_path(config_dir: Path | str = ".") -> Path:
    """Get path to config file."""
    return Path(config_dir) / ".interplay_config.json"


def load_config(config_dir: Path | str = ".") -> Config:
    """Load config from file, or return defaults if not found."""
    path = get_config_path(config_dir)

    if not path.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            saved = json.load(f)
        # Merge with defaults to handle missing keys
        config = DEFAULT_CONFIG.copy()
        config.update(saved)
        return config
    except (json.JSONDecodeError, IOError):
        return DEFAULT_CONFIG.copy()


def save_config(config: Config, config_dir: Path | str = ".") -> bool:
    """Save config to file. Returns True on success."""
    path = get_config_path(config_dir)

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except IOError:
        return False


def set_content_path(content_path: str | None, config_dir: Path | str = ".") -> None:
    """Save default content pack."""
    config = load_config(config_dir)
    config["content_path"] = content_path
    save_config(config, config_dir)


def set_state_path(state_path: str | None, config_dir: Path | str = ".") -> None:
    """Save default progression file."""
    config = load_config(config_dir)
    config["state_path"] = state_path
    save_config(config, config_dir)


def set_log_level(level: str, config_dir: Path | str = ".") -> None:
    """Save log level preference."""
    config = load_config(config_dir)
    config["log_level"] = level.upper()
    save_config(config, config_dir)


def set_show_hidden(show_hidden: bool, config_dir: Path | str = ".") -> None:
    """Save whether `check` lists hidden interactions."""
    config = load_config(config_dir)
    config["show_hidden"] = show_hidden
    save_config(config, config_dir)
