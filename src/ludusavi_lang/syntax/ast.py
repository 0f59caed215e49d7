"""Syntax tree for parsed catalogs.

One frozen dataclass per FTL construct the Ludusavi catalog can contain.
Nodes carry no behavior beyond trivial queries; the formatter walks them
with match statements.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeAlias

from ludusavi_lang.enums import CommentType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Identifier",
    # Resource structure
    "Resource",
    "Message",
    "Term",
    "Attribute",
    "Comment",
    "Junk",
    # Pattern elements
    "Pattern",
    "TextElement",
    "Placeable",
    # Expressions
    "SelectExpression",
    "Variant",
    "StringLiteral",
    "NumberLiteral",
    "VariableReference",
    "MessageReference",
    "TermReference",
    "FunctionReference",
    "CallArguments",
    "NamedArgument",
    # Type aliases
    "Entry",
    "PatternElement",
    "Expression",
    "InlineExpression",
    "VariantKey",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier: [a-zA-Z][a-zA-Z0-9_-]*"""

    name: str


# ============================================================================
# TOP-LEVEL ENTRIES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Resource:
    """Root AST node containing all entries."""

    entries: tuple["Entry", ...]


@dataclass(frozen=True, slots=True)
class Message:
    """Message definition.

    Examples:
        hello = Hello, world!
        button-backup = Back up
        field-search-game-name =
            .placeholder = Name
    """

    id: Identifier
    value: "Pattern | None"
    attributes: tuple["Attribute", ...]
    comment: "Comment | None" = None
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Term:
    """Term definition (private, prefixed with -).

    Example:
        -brand = Ludusavi
    """

    id: Identifier
    value: "Pattern"
    attributes: tuple["Attribute", ...]
    comment: "Comment | None" = None
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Attribute:
    """Message or term attribute.

    Example:
        cli-unable-to-request-confirmation = Unable to request confirmation.
            .winpty-workaround = ...  <- attribute
    """

    id: Identifier
    value: "Pattern"


@dataclass(frozen=True, slots=True)
class Comment:
    """Comment line(s). A single-# comment directly above an entry is
    attached to that entry instead of standing alone.
    """

    content: str
    type: CommentType
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Junk:
    """Source lines no rule could parse.

    The parser keeps going after Junk; MessageCatalog refuses to build
    from a resource that contains any.
    """

    content: str
    span: Span | None = None


# ============================================================================
# PATTERNS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pattern:
    """Message body: text runs interleaved with placeables.

    Block patterns are stored already dedented, so

        cli-summary =
            .succeeded =
                Overall:
                  Games: { $total-games }

    yields the text "Overall:\n  Games: " followed by a Placeable.
    """

    elements: tuple["PatternElement", ...]

    @property
    def is_empty(self) -> bool:
        return not self.elements


@dataclass(frozen=True, slots=True)
class TextElement:
    """Plain text segment."""

    value: str


@dataclass(frozen=True, slots=True)
class Placeable:
    """Dynamic content: { expression }"""

    expression: "Expression"


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class SelectExpression:
    """Conditional expression with variants.

    Example:
        { $total-games ->
            [one] game
           *[other] games
        }
    """

    selector: "InlineExpression"
    variants: tuple["Variant", ...]


@dataclass(frozen=True, slots=True)
class Variant:
    """Single variant in select expression."""

    key: "VariantKey"
    value: "Pattern"
    default: bool = False


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal: "text"

    Supports escape sequences:
        \\" -> "
        \\\\ -> \\
        \\u0000 -> Unicode
    """

    value: str


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Number literal: 42, -1 or 3.14 (raw keeps the source spelling)."""

    value: int | float
    raw: str


@dataclass(frozen=True, slots=True)
class VariableReference:
    """Variable reference: $variable"""

    id: Identifier


@dataclass(frozen=True, slots=True)
class MessageReference:
    """Message reference: message-id or message-id.attribute"""

    id: Identifier
    attribute: Identifier | None = None


@dataclass(frozen=True, slots=True)
class TermReference:
    """Term reference: -term-id or -term-id.attribute"""

    id: Identifier
    attribute: Identifier | None = None


@dataclass(frozen=True, slots=True)
class FunctionReference:
    """Function call: FUNCTION(arg1, key: value)"""

    id: Identifier
    arguments: "CallArguments"


@dataclass(frozen=True, slots=True)
class CallArguments:
    """Function call arguments."""

    positional: tuple["InlineExpression", ...]
    named: tuple["NamedArgument", ...]


@dataclass(frozen=True, slots=True)
class NamedArgument:
    """Named argument: name: value"""

    name: Identifier
    value: "StringLiteral | NumberLiteral"


# ============================================================================
# TYPE ALIASES
# ============================================================================

Entry: TypeAlias = Message | Term | Comment | Junk
PatternElement: TypeAlias = TextElement | Placeable
Expression: TypeAlias = "SelectExpression | InlineExpression"
InlineExpression: TypeAlias = (
    StringLiteral
    | NumberLiteral
    | VariableReference
    | MessageReference
    | TermReference
    | FunctionReference
    | Placeable
)
VariantKey: TypeAlias = Identifier | NumberLiteral
