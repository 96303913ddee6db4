"""Data model for release note configuration."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class NoteVariant(BaseModel):
    """A category of release note, identified by its file extension."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Suffix (without the leading dot) used to tag fragment files
    extension: str = Field(min_length=1)
    name: str = Field(min_length=1)
    show_content: bool


class Configuration(BaseModel):
    """Contents of a ``noter.toml`` file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Relative to the directory holding the configuration file
    directory: str
    filename: str
    title_format: str
    issue_format: str
    variant: Tuple[NoteVariant, ...] = ()


class NoteEntry(BaseModel):
    """A single fragment file, keyed by its name without the variant suffix."""

    model_config = ConfigDict(frozen=True)

    base_file_name: str
    content: str
