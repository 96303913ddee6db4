"""Output dialects for release notes.

A formatter turns writer events into literal lines. It holds no state, so a
single instance can be shared between documents.
"""

from typing import List, Protocol

from ..config import NoteVariant
from ..errors import ConfigError


def note_line(variant: NoteVariant, ticket: str, description: str, issue: str) -> str:
    """Build a single note line.

    The description is dropped entirely when the variant hides content.
    Fields are concatenated as given, with no escaping.
    """
    line = f"- {ticket}: "
    if variant.show_content:
        line += f"{description} "
    return line + issue


class Formatter(Protocol):
    """Rendering capability used by the document writer."""

    def render_title(self, title: str) -> List[str]:
        ...

    def render_section_header(self, variant: NoteVariant) -> List[str]:
        ...

    def render_note_line(self, variant: NoteVariant, ticket: str,
                         description: str, issue: str) -> List[str]:
        ...


class TextFormatter:
    """reStructuredText style headings, underlined to the heading's length."""

    def render_title(self, title: str) -> List[str]:
        return [title, "=" * len(title)]

    def render_section_header(self, variant: NoteVariant) -> List[str]:
        return [variant.name, "-" * len(variant.name)]

    def render_note_line(self, variant: NoteVariant, ticket: str,
                         description: str, issue: str) -> List[str]:
        return [note_line(variant, ticket, description, issue)]


class MarkdownFormatter:
    """ATX headings, each followed by a blank line."""

    def render_title(self, title: str) -> List[str]:
        return [f"# {title}", ""]

    def render_section_header(self, variant: NoteVariant) -> List[str]:
        return [f"## {variant.name}", ""]

    def render_note_line(self, variant: NoteVariant, ticket: str,
                         description: str, issue: str) -> List[str]:
        return [note_line(variant, ticket, description, issue)]


# Changelog file suffix -> formatter
FORMATTERS = {
    ".md": MarkdownFormatter,
    ".rst": TextFormatter,
}


def formatter_for_filename(filename: str) -> Formatter:
    """Pick a formatter from the changelog file name.

    Args:
        filename: Changelog file name, e.g. ``ReleaseNotes.rst``

    Returns:
        Formatter instance for the file's dialect
    """
    for suffix, formatter_cls in FORMATTERS.items():
        if filename.endswith(suffix):
            return formatter_cls()

    raise ConfigError(
        f"expected `filename` ending with .md or .rst, found {filename}"
    )
