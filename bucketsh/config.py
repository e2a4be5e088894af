"""
Configuration management for bucketsh.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/bucketsh/config.json
- Fallback: ~/.bucketsh/config.json
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict, field

logger = logging.getLogger(__name__)


@dataclass
class ShellConfig:
    """Interactive shell settings."""
    prompt: str = "bsh:{path} $ "
    history_file: Optional[str] = None
    raw: bool = False


@dataclass
class StoreConfig:
    """Store file settings."""
    lock_timeout: float = 1.0
    echo_sql: bool = False


@dataclass
class BshConfig:
    """Main bucketsh configuration."""
    shell: ShellConfig = field(default_factory=ShellConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "shell": asdict(self.shell),
            "store": asdict(self.store),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BshConfig':
        """Create from dictionary."""
        shell_data = data.get("shell", {})
        store_data = data.get("store", {})
        return cls(
            shell=ShellConfig(**shell_data),
            store=StoreConfig(**store_data),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. $XDG_CONFIG_HOME/bucketsh/config.json (usually ~/.config/bucketsh/config.json)
    2. Fallback: ~/.bucketsh/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "bucketsh"
    else:
        config_dir = Path.home() / ".bucketsh"

    return config_dir / "config.json"


def load_config() -> BshConfig:
    """
    Load configuration from file.

    Returns:
        BshConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return BshConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return BshConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration")
        return BshConfig()


def save_config(config: BshConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path
