"""
Configuration Loader

Loads the YAML configuration file holding catalog paths and
image-search settings.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_FILE = 'reconciler.yaml'


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str = DEFAULT_CONFIG_FILE) -> Dict[str, Any]:
    """
    Load a YAML configuration file from the config directory.

    Args:
        filename: Name of the config file (e.g., 'reconciler.yaml')

    Returns:
        Parsed YAML content as dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename
    return load_config_file(config_path)


def load_config_file(config_path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file from an explicit path.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the top-level YAML value is not a mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return data


def load_search_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Get the image-search section of the configuration.

    Args:
        config: Parsed config (if None, loads the default config file)

    Returns:
        Dictionary with delay_seconds, per_page, safesearch, etc.
    """
    if config is None:
        config = load_config()
    return config.get('search', {}) or {}
