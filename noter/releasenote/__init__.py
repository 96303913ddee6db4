"""Release note generation module."""

from .formatter import (
    Formatter,
    TextFormatter,
    MarkdownFormatter,
    formatter_for_filename,
)
from .writer import DocumentWriter
from .generator import (
    render_template,
    find_variant,
    collect_notes,
    compile_release_notes,
    resolve_version,
    prepend_release_notes,
)

__all__ = [
    "Formatter",
    "TextFormatter",
    "MarkdownFormatter",
    "formatter_for_filename",
    "DocumentWriter",
    "render_template",
    "find_variant",
    "collect_notes",
    "compile_release_notes",
    "resolve_version",
    "prepend_release_notes",
]
