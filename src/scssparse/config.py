"""
Parser Configuration

Loads configuration from a YAML file, then applies environment variable
overrides.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".scssparse" / "config.yaml",
    Path("scssparse.yaml"),
]


DEFAULT_CONFIG = {
    # Regex mode: unicode word classes for utf-8, ASCII otherwise
    "encoding": "utf-8",
    # Tried in order when reading stylesheet files
    "file_encodings": ["utf-8-sig", "utf-8", "latin-1"],
    "source_name": "(stdin)",
    "keep_comments": True,
    "log_level": "WARNING",
}

ENV_MAPPINGS = {
    "SCSSPARSE_ENCODING": "encoding",
    "SCSSPARSE_SOURCE_NAME": "source_name",
    "SCSSPARSE_KEEP_COMMENTS": "keep_comments",
    "SCSSPARSE_LOG_LEVEL": "log_level",
}

TRUE_STRINGS = ("1", "true", "yes", "on")


class ConfigError(Exception):
    """Configuration file could not be read or is malformed."""


class ParserConfig:
    """Configuration for the parser and the CLI."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        # Load from file if found
        self._load_config(config_path)

        # Override with environment variables
        self._apply_env_overrides()

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        if explicit_path is not None:
            explicit_path = Path(explicit_path)
            if not explicit_path.exists():
                raise ConfigError(f"Config file not found: {explicit_path}")
            search_paths = [explicit_path]
        else:
            search_paths = CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    raise ConfigError(f"Failed to load config from {config_path}: {e}") from e

                if not isinstance(user_config, dict):
                    raise ConfigError(f"Config file {config_path} must contain a mapping")

                unknown = set(user_config) - set(DEFAULT_CONFIG)
                if unknown:
                    logger.warning(f"Ignoring unknown config keys in {config_path}: {sorted(unknown)}")

                self._config.update({k: v for k, v in user_config.items() if k in DEFAULT_CONFIG})
                self._config_path = config_path
                logger.debug(f"Loaded config from {config_path}")
                return

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        for env_var, config_key in ENV_MAPPINGS.items():
            if env_var in os.environ:
                value = os.environ[env_var]
                if config_key == "keep_comments":
                    value = value.strip().lower() in TRUE_STRINGS
                self._config[config_key] = value

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def encoding(self) -> str:
        return self._config["encoding"]

    @property
    def file_encodings(self) -> List[str]:
        """Encodings tried, in order, when reading files."""
        encodings = self._config["file_encodings"]
        if isinstance(encodings, str):
            return [encodings]
        return list(encodings)

    @property
    def source_name(self) -> str:
        return self._config["source_name"]

    @property
    def keep_comments(self) -> bool:
        return bool(self._config["keep_comments"])

    @property
    def log_level(self) -> str:
        return str(self._config["log_level"]).upper()

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "encoding": self.encoding,
            "file_encodings": self.file_encodings,
            "source_name": self.source_name,
            "keep_comments": self.keep_comments,
            "log_level": self.log_level,
            "config_file": str(self._config_path) if self._config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[ParserConfig] = None


def get_config(config_path: Optional[Path] = None) -> ParserConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = ParserConfig(config_path)
    return _config


def reset_config() -> None:
    """Drop the cached global config so the next get_config() reloads it."""
    global _config
    _config = None


def write_default_config(path: Optional[Path] = None) -> Path:
    """
    Write a default configuration file.

    Returns the path where config was written.
    """
    if path is None:
        path = Path.home() / ".scssparse" / "config.yaml"

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    config_content = """# scssparse configuration
#
# Every setting can also be overridden with an environment variable:
# SCSSPARSE_ENCODING, SCSSPARSE_SOURCE_NAME, SCSSPARSE_KEEP_COMMENTS,
# SCSSPARSE_LOG_LEVEL

# Pattern mode. utf-8 enables unicode identifiers; anything else is ASCII only.
encoding: utf-8

# Encodings tried in order when reading stylesheet files
file_encodings:
  - utf-8-sig
  - utf-8
  - latin-1

# Name used in error messages when parsing text that is not a file
source_name: "(stdin)"

# Keep /* */ comments in the tree
keep_comments: true

# DEBUG, INFO, WARNING, ERROR
log_level: WARNING
"""

    with open(path, 'w', encoding='utf-8') as f:
        f.write(config_content)

    return path
