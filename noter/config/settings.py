"""Configuration management for Noter."""

import logging
import tomllib
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigError
from .models import Configuration


CONFIG_FILE_NAME = "noter.toml"

SAMPLE_CONFIG = '''directory = "unreleased_notes"
filename = "ReleaseNotes.rst"
title_format = "v{version} - {project_date}"
issue_format = "`{issue} <https://www.example.com/{issue}>`_"

[[variant]]
extension = "breaking"
name = "Incompatible Changes"
show_content = true

[[variant]]
extension = "feature"
name = "Features"
show_content = true

[[variant]]
extension = "bugfix"
name = "Bugfixes"
show_content = true

[[variant]]
extension = "doc"
name = "Improved Documentation"
show_content = true
'''

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Environment defaults for the command line."""

    config_dir: Optional[str] = None
    version: Optional[str] = None

    @field_validator('config_dir', 'version')
    @classmethod
    def blank_is_unset(cls, v):
        """Treat empty environment values as not set."""
        if v is not None and not v.strip():
            return None
        return v

    model_config = SettingsConfigDict(env_prefix="NOTER_", case_sensitive=False)


def find_config_file(directory: Union[str, Path] = ".") -> Optional[Path]:
    """Find ``noter.toml`` in a directory.

    Args:
        directory: Directory to search in

    Returns:
        Path to config file or None if not found
    """
    path = Path(directory) / CONFIG_FILE_NAME
    if path.is_file():
        return path
    return None


def parse_config(raw: str) -> Configuration:
    """Parse TOML text into a Configuration.

    Args:
        raw: TOML document

    Returns:
        Configuration object
    """
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"unable to parse config: {e}") from e

    try:
        config = Configuration(**data)
    except ValidationError as e:
        raise ConfigError(f"invalid config: {e}") from e

    seen = set()
    for variant in config.variant:
        if variant.extension in seen:
            raise ConfigError(f"duplicate variant extension '{variant.extension}'")
        seen.add(variant.extension)

    return config


def load_config(directory: Union[str, Path] = ".") -> Configuration:
    """Load ``noter.toml`` from a directory.

    Args:
        directory: Directory containing the config file

    Returns:
        Configuration object
    """
    config_path = find_config_file(directory)
    if config_path is None:
        raise ConfigError(f"failed to find {CONFIG_FILE_NAME} in {directory}")

    logger.debug(f"Loading config from {config_path}")
    try:
        raw = config_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"unable to load config {config_path}: {e}") from e

    return parse_config(raw)


def create_sample_config(directory: Union[str, Path] = ".") -> Path:
    """Create a sample configuration file.

    Args:
        directory: Directory where to create the sample config file

    Returns:
        Path of the written file
    """
    path = Path(directory) / CONFIG_FILE_NAME
    if path.exists():
        raise ConfigError(f"{path} already exists")

    path.write_text(SAMPLE_CONFIG, encoding='utf-8')
    return path
