"""Document writer for release notes."""

from typing import List, Optional

from ..config import NoteVariant
from ..errors import MisuseError
from .formatter import Formatter


class DocumentWriter:
    """Accumulate formatter output into a single release notes document.

    Calls must follow the order ``begin``, then any number of
    ``open_section`` / ``add_note`` ... / ``close_section`` blocks, then
    ``serialize``. Sections do not nest.
    """

    def __init__(self, formatter: Formatter):
        self.formatter = formatter
        self._lines: List[str] = []
        self._open_variant: Optional[NoteVariant] = None

    @property
    def open_variant(self) -> Optional[NoteVariant]:
        """Variant of the section currently open, if any."""
        return self._open_variant

    def begin(self, title: str) -> None:
        self._lines.extend(self.formatter.render_title(title))

    def open_section(self, variant: NoteVariant) -> None:
        self._lines.extend(self.formatter.render_section_header(variant))
        self._open_variant = variant

    def add_note(self, ticket: str, description: str, issue: str) -> None:
        """Append one note to the open section.

        Raises:
            MisuseError: If no section is open
        """
        if self._open_variant is None:
            raise MisuseError("add_note called with no open section")

        self._lines.extend(
            self.formatter.render_note_line(self._open_variant, ticket, description, issue)
        )

    def close_section(self) -> None:
        self.spacing(1)
        self._open_variant = None

    def spacing(self, lines: int) -> None:
        """Append ``lines`` blank lines.

        On an empty buffer one extra line is added, otherwise the joined
        output would not show the separator.
        """
        if not self._lines:
            lines += 1
        self._lines.extend([""] * lines)

    def serialize(self) -> str:
        """Join the accumulated lines and reset the buffer."""
        lines, self._lines = self._lines, []
        return "\n".join(lines)
