"""
Configuration loader for prngstream.

Reads configs/config.yaml (or the file named by $PRNGSTREAM_CONFIG) and
provides a single dict accessible throughout the project.
"""

import os
from pathlib import Path
import yaml


# Package root = two levels up from this file (prngstream/utils/config.py -> prngstream/)
PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "configs" / "config.yaml"
CONFIG_ENV_VAR = "PRNGSTREAM_CONFIG"


def load_config(config_path: str | Path | None = None) -> dict:
    """Load YAML configuration file and return as a dictionary.

    Args:
        config_path: Path to config file. Defaults to $PRNGSTREAM_CONFIG,
            then configs/config.yaml inside the package.

    Returns:
        Configuration dictionary.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    return config or {}


# Singleton: loaded once, imported everywhere
_config = None


def get_config() -> dict:
    """Return the cached configuration (loads on first call)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_stream_config() -> dict:
    """Shortcut for the `stream` section, empty if absent."""
    return get_config().get("stream") or {}
