# src/tidyimports/core/config.py
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .policy import SortPolicy

CONFIG_FILENAME = ".tidyimports.yaml"
DEFAULT_EXTENSIONS = [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"]


@dataclass
class Config:
    """Configuration data class for tidyimports."""

    log_dir: Optional[str] = None
    manual_saves_only: bool = True
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    policy: SortPolicy = field(default_factory=SortPolicy)


def get_config_dir() -> Path:
    """Get the tidyimports configuration directory."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", "~/.config")
    return Path(xdg_config_home).expanduser() / "tidyimports"


def get_default_config() -> Config:
    """Get default configuration with environment variable overrides."""
    log_dir = os.environ.get("TIDYIMPORTS_LOG_DIR")
    marker = os.environ.get("TIDYIMPORTS_TYPE_MARKER")

    policy = SortPolicy(type_marker=marker) if marker else SortPolicy()
    return Config(log_dir=log_dir, policy=policy)


def find_config(start: Path) -> Optional[Path]:
    """Look for a project config file in start and its parents, then the user config."""
    start = Path(start).resolve()
    if start.is_file():
        start = start.parent

    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate

    user_config = get_config_dir() / "config.yaml"
    if user_config.is_file():
        return user_config
    return None


def load_config(config_path: Path) -> Config:
    """Load configuration from YAML file."""
    with open(config_path, "r") as f:
        config_data = yaml.safe_load(f) or {}

    if not isinstance(config_data, dict):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")

    try:
        policy = SortPolicy(**(config_data.pop("policy", None) or {}))
        return Config(**config_data, policy=policy)
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"{config_path}: {e}") from e


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_dict = {
        "log_dir": config.log_dir,
        "manual_saves_only": config.manual_saves_only,
        "extensions": list(config.extensions),
        "policy": config.policy.to_dict(),
    }

    with open(config_path, "w") as f:
        yaml.safe_dump(config_dict, f, sort_keys=False)
