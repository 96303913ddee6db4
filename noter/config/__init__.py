"""Configuration module."""

from .models import NoteVariant, Configuration, NoteEntry
from .settings import (
    Settings,
    CONFIG_FILE_NAME,
    find_config_file,
    parse_config,
    load_config,
    create_sample_config,
)

__all__ = [
    "NoteVariant",
    "Configuration",
    "NoteEntry",
    "Settings",
    "CONFIG_FILE_NAME",
    "find_config_file",
    "parse_config",
    "load_config",
    "create_sample_config",
]
