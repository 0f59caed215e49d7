"""Read position over catalog source.

Grammar rules never mutate a position; they take a Cursor and hand back a
new one inside a ParseResult. A rule that fails simply returns None and the
caller keeps its own cursor, so backtracking costs nothing.

Sources are LF-only by the time a Cursor sees them (CatalogParser
normalizes CRLF and lone CR first).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from ludusavi_lang.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseResult"]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable (source, offset) pair.

    Example:
        >>> cursor = Cursor("ludusavi = Ludusavi", 0)
        >>> cursor.current
        'l'
        >>> cursor.advance(9).current
        '='
        >>> cursor.pos
        0
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: At end of input. Rules check is_eof first.
        """
        if self.is_eof:
            raise EOFError(ErrorTemplate.unexpected_eof(self.pos).message)
        return self.source[self.pos]

    @property
    def line_start(self) -> int:
        """Offset of the first character on the cursor's line."""
        return self.source.rfind("\n", 0, self.pos) + 1

    @property
    def at_line_start(self) -> bool:
        """True in column 1, where entries must begin."""
        return self.pos == self.line_start

    def peek(self, offset: int = 0) -> str | None:
        """Character at pos + offset, or None past the end."""
        target = self.pos + offset
        return self.source[target] if target < len(self.source) else None

    def advance(self, count: int = 1) -> "Cursor":
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        return self.source[self.pos : end_pos]

    def skip_spaces(self) -> "Cursor":
        """Skip U+0020 only. Tabs are text in FTL, not indentation."""
        end = self.pos
        while end < len(self.source) and self.source[end] == " ":
            end += 1
        return Cursor(self.source, end)

    def skip_whitespace(self) -> "Cursor":
        """Skip spaces and line feeds."""
        end = self.pos
        while end < len(self.source) and self.source[end] in " \n":
            end += 1
        return Cursor(self.source, end)

    def skip_to_line_end(self) -> "Cursor":
        """Move onto the next line feed (or EOF) without consuming it."""
        end = self.source.find("\n", self.pos)
        return Cursor(self.source, len(self.source) if end == -1 else end)

    def compute_line_col(self) -> tuple[int, int]:
        """1-based (line, column) for error locations. O(pos)."""
        line = self.source.count("\n", 0, self.pos) + 1
        return (line, self.pos - self.line_start + 1)


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """A rule's value plus the cursor just past it.

    Rules have the shape ``parse_x(cursor, ...) -> ParseResult[X] | None``.
    """

    value: T
    cursor: Cursor
