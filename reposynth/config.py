#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

import logging
import sys

import yaml

from .errors import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("reposynth")

CONFIG_FILENAMES = ['.reposynth.yaml', '.reposynth.yml', '.reposynth.json', '.reposynth.toml']
USER_CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path() -> Path:
    """Get the path to the workspace configuration file.

    Checks in order:
    1. REPOSYNTH_CONFIG environment variable
    2. .reposynth.{yaml,yml,json,toml} in the current directory
    3. ~/.reposynth/ directory
    """
    if 'REPOSYNTH_CONFIG' in os.environ:
        return Path(os.environ['REPOSYNTH_CONFIG']).expanduser()

    cwd = Path.cwd()
    for filename in CONFIG_FILENAMES:
        path = cwd / filename
        if path.exists():
            return path

    user_dir = Path.home() / '.reposynth'
    for filename in USER_CONFIG_FILENAMES:
        path = user_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return cwd / CONFIG_FILENAMES[0]


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        elif suffix in ['.yaml', '.yml']:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
        else:
            # Default to JSON format
            with open(config_path, 'r') as f:
                file_config = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Error loading config from {config_path}: {e}")
        raise ConfigError(f"Cannot read {config_path}: {e}", str(config_path)) from e

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level", str(config_path))
    return file_config


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load configuration, merged over the defaults.

    Args:
        path: Explicit config file. It must exist. When omitted the file
            from get_config_path() is used if present.

    Raises:
        ConfigError: The file is missing (explicit path) or unreadable
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}", str(config_path))
    else:
        config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        config = merge_configs(config, _read_config_file(config_path))
        logger.debug(f"Loaded config from {config_path}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Save configuration to path; the format follows the extension."""
    config_path = Path(path).expanduser()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if config_path.suffix.lower() in ['.yaml', '.yml']:
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=False)
    elif config_path.suffix.lower() == '.json':
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)
    else:
        raise ConfigError(f"Cannot write config as {config_path.suffix or 'no extension'}; use .yaml or .json")

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "repository": {
            "id": "root",
            "outdir": ".",
            "platform": "github",
            "platform_options": {},
            "dry_run": False,
        },
        "auto_wrap": {
            "enabled": True,
            "platform": "github",
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s",
        },
        "projects": [],
    }


def get_example_config() -> Dict[str, Any]:
    """Starter workspace written by `reposynth config init`."""
    return {
        "repository": {
            "platform": "github",
            "platform_options": {
                "ignore_languages": ["python"],
            },
        },
        "projects": [
            {
                "id": "api",
                "owners": ["@my-org/api"],
                "files": {
                    "README.md": "# api\n",
                },
            },
            {
                "id": "web",
                "owners": ["@my-org/web"],
                "files": {
                    "README.md": "# web\n",
                    "package.json": {"name": "web", "private": True},
                },
            },
        ],
    }


def configure_logging(config: Dict[str, Any], debug: bool = False) -> None:
    """Apply the logging section to the reposynth logger."""
    section = config.get("logging", {})
    level_name = "DEBUG" if debug else str(section.get("level", "INFO")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        raise ConfigError(f"Unknown logging level '{section.get('level')}'")
    logger.setLevel(level)
    fmt = section.get("format")
    if fmt:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(fmt))


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: REPOSYNTH_SECTION_KEY
    For example: REPOSYNTH_REPOSITORY_DRY_RUN=true
    """
    env_prefix = "REPOSYNTH_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', '1', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', '0', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts_from_key = config_key.split('_')
                if key_parts[i : i + len(config_key_parts_from_key)] == config_key_parts_from_key:
                    if len(config_key_parts_from_key) > best_match_len:
                        best_match_len = len(config_key_parts_from_key)
                        matched_key = config_key

            if matched_key:
                # If we are at the end of the env var, we have found the key to set
                if i + best_match_len == len(key_parts):
                    current_level[matched_key] = typed_value
                    break

                # Otherwise, we descend into the dictionary
                if isinstance(current_level[matched_key], dict):
                    current_level = current_level[matched_key]
                    i += best_match_len
                else:
                    # Path conflict, e.g., env var is longer but we found a non-dict value
                    break
            else:
                # No match found
                break

    return config
