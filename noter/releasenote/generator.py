"""Release note generation logic."""

import logging
import tomllib
from datetime import date
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from ..config import Configuration, NoteEntry, NoteVariant
from ..errors import ConfigError, NoNotesError, TemplateError, VersionError
from .writer import DocumentWriter


PROJECT_DATE_FORMAT = "%Y-%m-%d"

logger = logging.getLogger(__name__)


def render_template(key: str, template: str, **values: str) -> str:
    """Substitute named placeholders in a configured template.

    Args:
        key: Configuration key the template came from, for error messages
        template: Format string such as ``v{version} - {project_date}``
        values: Placeholder values

    Returns:
        Rendered string
    """
    try:
        return template.format_map(values)
    except KeyError as e:
        raise TemplateError(key, template, f"unknown placeholder {e}") from e
    except IndexError as e:
        raise TemplateError(key, template, "positional placeholders are not supported") from e
    except (ValueError, AttributeError) as e:
        raise TemplateError(key, template, str(e)) from e


def find_variant(config: Configuration, file_name: str) -> Optional[NoteVariant]:
    """Return the first variant whose extension ends ``file_name``."""
    for variant in config.variant:
        if file_name.endswith(f".{variant.extension}"):
            return variant
    return None


def collect_notes(config: Configuration,
                  notes_dir: Union[str, Path]) -> Dict[NoteVariant, List[NoteEntry]]:
    """Read fragment files and group them by variant.

    Args:
        config: Loaded configuration
        notes_dir: Directory holding the fragment files

    Returns:
        Mapping of variant to its entries, in file name order
    """
    notes_dir = Path(notes_dir)
    if not notes_dir.is_dir():
        raise ConfigError(f"release notes directory {notes_dir} does not exist")

    notes_by_variant: Dict[NoteVariant, List[NoteEntry]] = {}

    for path in sorted(notes_dir.iterdir()):
        if not path.is_file():
            continue

        variant = find_variant(config, path.name)
        if variant is None:
            logger.debug(f"Skipping {path.name}: no matching variant")
            continue

        base_file_name = path.name[:-(len(variant.extension) + 1)]
        try:
            content = path.read_text(encoding='utf-8').strip()
        except UnicodeDecodeError as e:
            raise ConfigError(f"release note {path} is not valid UTF-8: {e}") from e
        notes_by_variant.setdefault(variant, []).append(
            NoteEntry(base_file_name=base_file_name, content=content)
        )

    if not notes_by_variant:
        raise NoNotesError(f"no release notes found in {notes_dir}")

    logger.info(
        f"Found {sum(len(v) for v in notes_by_variant.values())} release notes "
        f"in {len(notes_by_variant)} variants"
    )
    return notes_by_variant


def compile_release_notes(writer: DocumentWriter,
                          config: Configuration,
                          version: str,
                          notes_by_variant: Mapping[NoteVariant, List[NoteEntry]],
                          project_date: Optional[date] = None) -> str:
    """Drive the writer over grouped notes and return the document.

    Variants are written in configuration order; variants without entries
    are skipped.

    Args:
        writer: Document writer with the desired formatter
        config: Loaded configuration
        version: Release version
        notes_by_variant: Entries grouped by variant
        project_date: Release date, defaults to today

    Returns:
        Formatted release notes
    """
    project_date = project_date or date.today()
    title = render_template(
        "title_format",
        config.title_format,
        version=version,
        project_date=project_date.strftime(PROJECT_DATE_FORMAT),
    )

    # Resolve every issue up front so a bad template leaves the writer untouched
    sections = []
    for variant in config.variant:
        entries = notes_by_variant.get(variant)
        if not entries:
            continue
        notes = [
            (entry, render_template("issue_format", config.issue_format,
                                    issue=entry.base_file_name))
            for entry in entries
        ]
        sections.append((variant, notes))

    writer.begin(title)
    for variant, notes in sections:
        writer.open_section(variant)
        for entry, issue in notes:
            writer.add_note(entry.base_file_name, entry.content, issue)
        writer.close_section()

    return writer.serialize()


def _table_value(data: dict, *keys: str):
    """Look up nested TOML keys, returning None if any level is not a table."""
    value = data
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def resolve_version(version_override: Optional[str] = None,
                    base_dir: Union[str, Path] = ".") -> str:
    """Determine the version for the release notes title.

    Args:
        version_override: Explicit version, used as is when given
        base_dir: Directory to look for ``pyproject.toml`` in

    Returns:
        Version string
    """
    if version_override:
        return version_override

    pyproject = Path(base_dir) / "pyproject.toml"
    if not pyproject.is_file():
        raise VersionError("failed to determine version number: no pyproject.toml and no --version given")

    try:
        data = tomllib.loads(pyproject.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise VersionError(f"failed to determine version number: {e}") from e

    version = _table_value(data, "project", "version")
    if not version:
        version = _table_value(data, "tool", "poetry", "version")
    if not isinstance(version, str) or not version:
        raise VersionError(f"failed to determine version number from {pyproject}")

    logger.debug(f"Using version {version} from {pyproject}")
    return str(version)


def prepend_release_notes(path: Union[str, Path], release_notes: str) -> None:
    """Insert release notes at the top of a changelog file.

    Args:
        path: Changelog file, created if missing
        release_notes: Formatted release notes
    """
    path = Path(path)
    content = release_notes
    if path.is_file():
        content = release_notes + "\n" + path.read_text(encoding='utf-8')

    path.write_text(content, encoding='utf-8')
    logger.info(f"Wrote release notes to {path}")
