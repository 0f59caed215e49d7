"""Catalog parser entry point.

CatalogParser turns FTL source into a :class:`~ludusavi_lang.syntax.ast.Resource`.

Architecture:
    The parser walks the source with an immutable
    :class:`~ludusavi_lang.syntax.cursor.Cursor`. Every grammar rule in
    :mod:`~ludusavi_lang.syntax.parser.rules` returns a ParseResult or None.
    An entry whose rule returns None becomes Junk, and parsing resumes at the
    next line that can start an entry (robustness principle).

    Whether Junk is acceptable is the caller's decision: MessageCatalog
    treats any Junk in the bundled catalog as fatal.

Security:
    Source size and placeable nesting are bounded by MAX_SOURCE_SIZE and
    MAX_DEPTH.
"""

from dataclasses import replace

from ludusavi_lang.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from ludusavi_lang.diagnostics import CatalogSyntaxError, ErrorTemplate
from ludusavi_lang.enums import CommentType
from ludusavi_lang.syntax.ast import Comment, Entry, Junk, Resource, Span
from ludusavi_lang.syntax.cursor import Cursor
from ludusavi_lang.syntax.parser.primitives import is_identifier_start
from ludusavi_lang.syntax.parser.rules import (
    ParseContext,
    parse_comment,
    parse_message,
    parse_term,
)

__all__ = ["CatalogParser", "normalize_line_endings"]


def normalize_line_endings(source: str) -> str:
    """Convert CRLF and lone CR to LF."""
    return source.replace("\r\n", "\n").replace("\r", "\n")


class CatalogParser:
    """FTL parser using the immutable cursor pattern.

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed placeable nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed placeable nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Resource:
        """Parse FTL source into a Resource.

        Args:
            source: FTL file content

        Returns:
            Resource whose entries are Message, Term, Comment or Junk nodes

        Raises:
            CatalogSyntaxError: If source exceeds max_source_size

        Example:
            >>> resource = CatalogParser().parse("button-backup = Back up")
            >>> resource.entries[0].id.name
            'button-backup'
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            raise CatalogSyntaxError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size)
            )

        source = normalize_line_endings(source)
        cursor = Cursor(source, 0)
        context = ParseContext(limit=self._max_nesting_depth)
        entries: list[Entry] = []

        # A single-hash comment directly above a message or term is attached to it
        pending_comment: Comment | None = None

        while True:
            blank_start = cursor.pos
            cursor = cursor.skip_whitespace()
            if cursor.is_eof:
                break

            # Entries end on their trailing newline, so two or more newlines
            # in the skipped region mean a blank line separates the entries.
            separated = source.count("\n", blank_start, cursor.pos) > 1
            if pending_comment is not None and (
                separated or pending_comment.type != CommentType.COMMENT
            ):
                entries.append(pending_comment)
                pending_comment = None

            line_start = cursor.line_start
            at_line_start = cursor.at_line_start

            if at_line_start and cursor.current == "#":
                comment_result = parse_comment(cursor)
                if comment_result is not None:
                    if pending_comment is not None:
                        entries.append(pending_comment)
                    pending_comment = comment_result.value
                    cursor = comment_result.cursor
                    continue

            entry_result = None
            if at_line_start and cursor.current == "-":
                entry_result = parse_term(cursor, context)
            elif at_line_start and is_identifier_start(cursor.current):
                entry_result = parse_message(cursor, context)

            if entry_result is not None:
                entry = entry_result.value
                if pending_comment is not None:
                    entry = replace(entry, comment=pending_comment)
                    pending_comment = None
                entries.append(entry)
                cursor = entry_result.cursor
                continue

            if pending_comment is not None:
                entries.append(pending_comment)
                pending_comment = None

            junk_start = Cursor(source, line_start)
            cursor = self._consume_junk_lines(junk_start)
            content = junk_start.slice_to(cursor.pos)
            entries.append(Junk(content=content, span=Span(start=line_start, end=cursor.pos)))

        if pending_comment is not None:
            entries.append(pending_comment)

        return Resource(entries=tuple(entries))

    def _consume_junk_lines(self, cursor: Cursor) -> Cursor:
        """Consume junk lines until a line that can start an entry.

        Junk ::= junk_line (junk_line - "#" - "-" - [a-zA-Z])*

        Returns:
            Cursor at the newline ending the last junk line (or EOF)
        """
        cursor = cursor.skip_to_line_end()

        while not cursor.is_eof:
            next_line = cursor.advance()
            if next_line.is_eof:
                break
            ch = next_line.current
            if ch in ("#", "-") or is_identifier_start(ch):
                break
            cursor = next_line.skip_to_line_end()

        return cursor
