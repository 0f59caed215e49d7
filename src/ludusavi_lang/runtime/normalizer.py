"""Whitespace reflow applied to every formatted message.

Catalog text is hand-wrapped at a fixed width. These passes undo that
wrapping while keeping paragraph breaks:

1. collapse_spaces: a run of 2+ spaces after a visible character becomes one
2. join_soft_lines: a single line break between visible characters becomes a space
3. normalize_paragraphs: 2+ line breaks between visible characters become one blank line

"Visible" means anything except space, CR and LF. The passes must run in
this order: pass 2 leaves multi-line breaks alone so pass 3 can normalize them.

The boundary characters are matched with lookarounds, so adjacent matches
can share a character (``a\\nb\\nc`` joins both breaks in one pass) and
normalize_text is idempotent.

Python 3.13+.
"""

import re

__all__ = [
    "collapse_spaces",
    "join_soft_lines",
    "normalize_paragraphs",
    "normalize_text",
]

_SPACE_RUN = re.compile(r"(?<=[^\r\n ]) {2,}")
_SOFT_LINE_BREAK = re.compile(r"(?<=[^\r\n ])[\r\n](?=[^\r\n ])")
_PARAGRAPH_BREAK = re.compile(r"(?<=[^\r\n ])[\r\n]{2,}(?=[^\r\n ])")


def collapse_spaces(text: str) -> str:
    """Reduce runs of spaces that follow a visible character to one space.

    Example:
        >>> collapse_spaces("a   b")
        'a b'
        >>> collapse_spaces("   indented")
        '   indented'
    """
    return _SPACE_RUN.sub(" ", text)


def join_soft_lines(text: str) -> str:
    """Replace a lone line break between visible characters with a space.

    Example:
        >>> join_soft_lines("a\\nb")
        'a b'
        >>> join_soft_lines("a\\n\\nb")
        'a\\n\\nb'
    """
    return _SOFT_LINE_BREAK.sub(" ", text)


def normalize_paragraphs(text: str) -> str:
    """Collapse 2+ line breaks between visible characters to one blank line.

    Example:
        >>> normalize_paragraphs("a\\n\\n\\nb")
        'a\\n\\nb'
    """
    return _PARAGRAPH_BREAK.sub("\n\n", text)


def normalize_text(text: str) -> str:
    """Apply all three passes in order.

    Example:
        >>> normalize_text("Back up\\nthese  games.\\n\\n\\nDone.")
        'Back up these games.\\n\\nDone.'
    """
    return normalize_paragraphs(join_soft_lines(collapse_spaces(text)))
