"""FTL syntax package.

Provides the AST definitions, the immutable cursor and the catalog parser.
Kept separate from runtime so the parser can be used without Babel.

Python 3.13+.
"""

from .ast import (
    Attribute,
    CallArguments,
    Comment,
    Entry,
    Expression,
    FunctionReference,
    Identifier,
    InlineExpression,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    Resource,
    SelectExpression,
    Span,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    VariantKey,
)
from .cursor import Cursor, ParseResult
from .parser import CatalogParser

__all__ = [
    "Attribute",
    "CallArguments",
    "CatalogParser",
    "Comment",
    "Cursor",
    "Entry",
    "Expression",
    "FunctionReference",
    "Identifier",
    "InlineExpression",
    "Junk",
    "Message",
    "MessageReference",
    "NamedArgument",
    "NumberLiteral",
    "ParseResult",
    "Pattern",
    "PatternElement",
    "Placeable",
    "Resource",
    "SelectExpression",
    "Span",
    "StringLiteral",
    "Term",
    "TermReference",
    "TextElement",
    "VariableReference",
    "Variant",
    "VariantKey",
]
