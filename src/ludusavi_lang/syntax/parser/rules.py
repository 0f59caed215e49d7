"""Grammar rules for the catalog parser.

Patterns, placeables and entries reference each other recursively, so the
rules share one module. Each takes an immutable Cursor and returns a
ParseResult, or None for "no match here"; the caller decides whether that
makes the entry junk.

Lookahead:
    - `{` starts a Placeable
    - `$` starts a VariableReference
    - `-` followed by a letter starts a TermReference
    - `->` after an inline expression starts a SelectExpression
    - an indented line starting with `.` starts an attribute
"""

from dataclasses import dataclass

from ludusavi_lang.constants import MAX_DEPTH
from ludusavi_lang.enums import CommentType
from ludusavi_lang.syntax.ast import (
    Attribute,
    CallArguments,
    Comment,
    FunctionReference,
    Identifier,
    InlineExpression,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
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
from ludusavi_lang.syntax.cursor import Cursor, ParseResult
from ludusavi_lang.syntax.parser.primitives import (
    _ASCII_DIGITS,
    is_identifier_start,
    parse_identifier,
    parse_number,
    parse_string_literal,
)

__all__ = [
    "ParseContext",
    "is_indented_continuation",
    "parse_comment",
    "parse_message",
    "parse_pattern",
    "parse_placeable",
    "parse_term",
]

# An indented line starting with one of these is syntax, never pattern text.
_NON_TEXT_LINE_STARTS: tuple[str, ...] = ("[", "*", ".", "}")

_COMMENT_TYPES: dict[int, CommentType] = {
    1: CommentType.COMMENT,
    2: CommentType.GROUP,
    3: CommentType.RESOURCE,
}


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Placeable nesting seen so far, threaded through recursive rules."""

    limit: int = MAX_DEPTH
    depth: int = 0

    @property
    def too_deep(self) -> bool:
        return self.depth >= self.limit

    def nested(self) -> "ParseContext":
        return ParseContext(limit=self.limit, depth=self.depth + 1)


@dataclass(frozen=True, slots=True)
class _Indent:
    """Leading spaces of a continuation line, dedented once the pattern ends."""

    width: int


# =============================================================================
# Pattern Parsing
# =============================================================================


def is_indented_continuation(cursor: Cursor) -> bool:
    """Check if the line after the newline at cursor continues the pattern.

    Blank lines are skipped. The first non-blank line must start with at
    least one space, and its first non-space character must not be one of
    ``[ * . }`` (variant keys, attributes, closing braces).

    Args:
        cursor: Position of a newline character

    Returns:
        True if the pattern continues on a following line
    """
    if cursor.is_eof or cursor.current != "\n":
        return False

    line = cursor.advance()
    while True:
        content = line.skip_spaces()
        if content.is_eof:
            return False
        if content.current != "\n":
            break
        line = content.advance()

    if content.pos == line.pos:
        return False  # Not indented
    return content.current not in _NON_TEXT_LINE_STARTS


def _finalize_pattern(pieces: list[str | Placeable | _Indent]) -> Pattern:
    """Remove common indentation, merge text runs and trim trailing blanks."""
    common_indent = min((p.width for p in pieces if isinstance(p, _Indent)), default=0)

    elements: list[PatternElement] = []
    buffer: list[str] = []
    for piece in pieces:
        match piece:
            case _Indent(width=width):
                buffer.append(" " * (width - common_indent))
            case str():
                buffer.append(piece)
            case Placeable():
                if buffer:
                    elements.append(TextElement("".join(buffer)))
                    buffer = []
                elements.append(piece)
    if buffer:
        elements.append(TextElement("".join(buffer)))

    while elements and isinstance(elements[-1], TextElement):
        trimmed = elements[-1].value.rstrip(" \n")
        if trimmed:
            elements[-1] = TextElement(trimmed)
            break
        elements.pop()

    return Pattern(elements=tuple(e for e in elements if e != TextElement("")))


def parse_pattern(
    cursor: Cursor,
    context: ParseContext,
    *,
    in_variant: bool = False,
) -> ParseResult[Pattern] | None:
    """Parse an inline or block pattern.

    The pattern may start on the current line or on the next indented line.
    Continuation lines are joined with newlines after removing their common
    indentation; blank lines between them are kept as empty lines.

    Examples:
        "Back up"  -> Pattern([TextElement("Back up")])
        "Size: { $total-size }"  -> Pattern([TextElement("Size: "), Placeable(...)])
        "\\n    Overall:\\n      Games: 3"  -> "Overall:\\n  Games: 3"

    Args:
        cursor: Position right after "=" (or "]" for variants) and inline blanks
        context: Placeable nesting so far
        in_variant: Stop at "}" (end of the enclosing select expression)

    Returns:
        ParseResult with a possibly empty Pattern, or None on a malformed placeable
    """
    pieces: list[str | Placeable | _Indent] = []
    stop_chars = ("{", "\n", "}") if in_variant else ("{", "\n")

    while not cursor.is_eof:
        ch = cursor.current

        if ch == "\n":
            if not is_indented_continuation(cursor):
                break
            while True:
                line = cursor.advance()
                cursor = line.skip_spaces()
                if cursor.current != "\n":
                    break
                if pieces:
                    pieces.append("\n")
            if pieces:
                pieces.append("\n")
            pieces.append(_Indent(cursor.pos - line.pos))
            continue

        if ch == "}" and in_variant:
            break

        if ch == "{":
            placeable_result = parse_placeable(cursor.advance(), context)
            if placeable_result is None:
                return None
            pieces.append(placeable_result.value)
            cursor = placeable_result.cursor
            continue

        text_start = cursor.pos
        while not cursor.is_eof and cursor.current not in stop_chars:
            cursor = cursor.advance()
        pieces.append(Cursor(cursor.source, text_start).slice_to(cursor.pos))

    return ParseResult(_finalize_pattern(pieces), cursor)


# =============================================================================
# Expression Parsing
# =============================================================================


def parse_placeable(cursor: Cursor, context: ParseContext) -> ParseResult[Placeable] | None:
    """Parse placeable body after the opening brace.

    Handles { $var }, { message.attr }, { -term }, { "literal" }, { 42 },
    { NUMBER($n) }, nested { { ... } } and { $sel -> variants }.

    Args:
        cursor: Position after "{"
        context: Placeable nesting so far

    Returns:
        ParseResult with the Placeable and cursor after "}", or None
    """
    if context.too_deep:
        return None
    nested = context.nested()

    cursor = cursor.skip_whitespace()
    expr_result = parse_inline_expression(cursor, nested)
    if expr_result is None:
        return None

    expression: InlineExpression | SelectExpression = expr_result.value
    cursor = expr_result.cursor.skip_whitespace()

    if cursor.source.startswith("->", cursor.pos):
        select_result = parse_select_expression(cursor.advance(2), expr_result.value, nested)
        if select_result is None:
            return None
        expression = select_result.value
        cursor = select_result.cursor.skip_whitespace()

    if cursor.is_eof or cursor.current != "}":
        return None
    return ParseResult(Placeable(expression=expression), cursor.advance())


def _parse_attribute_accessor(cursor: Cursor) -> tuple[Identifier | None, Cursor] | None:
    """Parse optional .attribute suffix on message and term references."""
    if cursor.is_eof or cursor.current != ".":
        return (None, cursor)
    attr_result = parse_identifier(cursor.advance())
    if attr_result is None:
        return None
    return (Identifier(attr_result.value), attr_result.cursor)


def parse_term_reference(cursor: Cursor) -> ParseResult[TermReference] | None:
    """Parse term reference: -term-id or -term-id.attribute"""
    id_result = parse_identifier(cursor.advance())  # Skip -
    if id_result is None:
        return None
    accessor = _parse_attribute_accessor(id_result.cursor)
    if accessor is None:
        return None
    attribute, cursor = accessor
    return ParseResult(TermReference(Identifier(id_result.value), attribute), cursor)


def parse_call_arguments(
    cursor: Cursor, context: ParseContext
) -> ParseResult[CallArguments] | None:
    """Parse the argument list of a call such as NUMBER($n, minimumFractionDigits: 2).

    Named argument values must be string or number literals, and all
    positional arguments must precede named ones.

    Args:
        cursor: Position after "("
        context: Placeable nesting so far

    Returns:
        ParseResult with CallArguments and cursor after ")", or None
    """
    positional: list[InlineExpression] = []
    named: list[NamedArgument] = []

    cursor = cursor.skip_whitespace()
    while not cursor.is_eof and cursor.current != ")":
        arg_result = parse_inline_expression(cursor, context)
        if arg_result is None:
            return None
        cursor = arg_result.cursor.skip_whitespace()
        value = arg_result.value

        if not cursor.is_eof and cursor.current == ":":
            if not isinstance(value, MessageReference) or value.attribute is not None:
                return None
            cursor = cursor.advance().skip_whitespace()
            literal_result = parse_inline_expression(cursor, context)
            if literal_result is None:
                return None
            literal = literal_result.value
            if not isinstance(literal, (StringLiteral, NumberLiteral)):
                return None
            named.append(NamedArgument(name=value.id, value=literal))
            cursor = literal_result.cursor.skip_whitespace()
        else:
            if named:
                return None
            positional.append(value)

        if cursor.is_eof:
            return None
        if cursor.current == ",":
            cursor = cursor.advance().skip_whitespace()
        elif cursor.current != ")":
            return None

    if cursor.is_eof:
        return None
    arguments = CallArguments(positional=tuple(positional), named=tuple(named))
    return ParseResult(arguments, cursor.advance())


def parse_inline_expression(  # noqa: PLR0911 - one return per grammar alternative
    cursor: Cursor, context: ParseContext
) -> ParseResult[InlineExpression] | None:
    """Parse inline expression.

    InlineExpression ::= StringLiteral | NumberLiteral | FunctionReference
                       | MessageReference | TermReference | VariableReference
                       | inline_placeable
    """
    if cursor.is_eof:
        return None

    ch = cursor.current

    if ch == '"':
        str_result = parse_string_literal(cursor)
        if str_result is None:
            return None
        return ParseResult(StringLiteral(value=str_result.value), str_result.cursor)

    if ch == "$":
        var_result = parse_identifier(cursor.advance())
        if var_result is None:
            return None
        return ParseResult(VariableReference(Identifier(var_result.value)), var_result.cursor)

    if ch == "-":
        next_ch = cursor.peek(1)
        if next_ch is not None and is_identifier_start(next_ch):
            return parse_term_reference(cursor)
        return parse_number(cursor)

    if ch in _ASCII_DIGITS:
        return parse_number(cursor)

    if ch == "{":
        return parse_placeable(cursor.advance(), context)

    id_result = parse_identifier(cursor)
    if id_result is None:
        return None
    identifier = Identifier(id_result.value)

    call_start = id_result.cursor.skip_whitespace()
    if not call_start.is_eof and call_start.current == "(":
        args_result = parse_call_arguments(call_start.advance(), context)
        if args_result is None:
            return None
        return ParseResult(FunctionReference(identifier, args_result.value), args_result.cursor)

    accessor = _parse_attribute_accessor(id_result.cursor)
    if accessor is None:
        return None
    attribute, cursor = accessor
    return ParseResult(MessageReference(identifier, attribute), cursor)


def parse_variant_key(cursor: Cursor) -> ParseResult[VariantKey] | None:
    """Parse variant key (number or identifier)."""
    if not cursor.is_eof and (cursor.current in _ASCII_DIGITS or cursor.current == "-"):
        return parse_number(cursor)
    id_result = parse_identifier(cursor)
    if id_result is None:
        return None
    return ParseResult(Identifier(id_result.value), id_result.cursor)


def parse_variant(cursor: Cursor, context: ParseContext) -> ParseResult[Variant] | None:
    """Parse variant: [key] pattern or *[key] pattern

    Examples:
        [one] game
        *[other] games
    """
    is_default = False
    if cursor.current == "*":
        is_default = True
        cursor = cursor.advance()

    if cursor.is_eof or cursor.current != "[":
        return None

    key_result = parse_variant_key(cursor.advance().skip_spaces())
    if key_result is None:
        return None

    cursor = key_result.cursor.skip_spaces()
    if cursor.is_eof or cursor.current != "]":
        return None

    pattern_result = parse_pattern(cursor.advance().skip_spaces(), context, in_variant=True)
    if pattern_result is None or pattern_result.value.is_empty:
        return None

    variant = Variant(key=key_result.value, value=pattern_result.value, default=is_default)
    return ParseResult(variant, pattern_result.cursor)


def parse_select_expression(
    cursor: Cursor,
    selector: InlineExpression,
    context: ParseContext,
) -> ParseResult[SelectExpression] | None:
    """Parse the variant list of a select expression.

    Each variant starts on its own line and exactly one must be marked
    as the default with "*".

    Args:
        cursor: Position after "->"
        selector: The already parsed selector expression
        context: Placeable nesting so far

    Returns:
        ParseResult with cursor on the closing "}", or None
    """
    cursor = cursor.skip_spaces()
    if cursor.is_eof or cursor.current != "\n":
        return None

    variants: list[Variant] = []
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            return None
        if cursor.current == "}":
            break
        variant_result = parse_variant(cursor, context)
        if variant_result is None:
            return None
        variants.append(variant_result.value)
        cursor = variant_result.cursor

    if sum(1 for v in variants if v.default) != 1:
        return None

    return ParseResult(SelectExpression(selector=selector, variants=tuple(variants)), cursor)


# =============================================================================
# Entry Parsing
# =============================================================================


def parse_attribute(cursor: Cursor, context: ParseContext) -> ParseResult[Attribute] | None:
    """Parse attribute after its leading dot: name = pattern"""
    id_result = parse_identifier(cursor)
    if id_result is None:
        return None

    cursor = id_result.cursor.skip_spaces()
    if cursor.is_eof or cursor.current != "=":
        return None

    pattern_result = parse_pattern(cursor.advance().skip_spaces(), context)
    if pattern_result is None or pattern_result.value.is_empty:
        return None

    attribute = Attribute(id=Identifier(id_result.value), value=pattern_result.value)
    return ParseResult(attribute, pattern_result.cursor)


def parse_attributes(
    cursor: Cursor, context: ParseContext
) -> ParseResult[tuple[Attribute, ...]] | None:
    """Parse zero or more indented .attribute lines following an entry value."""
    attributes: list[Attribute] = []

    while not cursor.is_eof and cursor.current == "\n":
        line = cursor.advance()
        marker = line.skip_whitespace()
        if marker.is_eof or marker.current != "." or marker.source[marker.pos - 1] != " ":
            break
        attr_result = parse_attribute(marker.advance(), context)
        if attr_result is None:
            return None
        attributes.append(attr_result.value)
        cursor = attr_result.cursor

    return ParseResult(tuple(attributes), cursor)


def _parse_entry_body(
    cursor: Cursor, context: ParseContext
) -> tuple[str, Pattern | None, tuple[Attribute, ...], Cursor] | None:
    """Shared message/term body: Identifier "=" Pattern? Attribute*"""
    id_result = parse_identifier(cursor)
    if id_result is None:
        return None

    cursor = id_result.cursor.skip_spaces()
    if cursor.is_eof or cursor.current != "=":
        return None

    pattern_result = parse_pattern(cursor.advance().skip_spaces(), context)
    if pattern_result is None:
        return None

    attrs_result = parse_attributes(pattern_result.cursor, context)
    if attrs_result is None:
        return None

    cursor = attrs_result.cursor
    if not cursor.is_eof and cursor.current != "\n":
        return None

    value = None if pattern_result.value.is_empty else pattern_result.value
    return (id_result.value, value, attrs_result.value, cursor)


def parse_message(cursor: Cursor, context: ParseContext) -> ParseResult[Message] | None:
    """Parse message: id = pattern, followed by optional attributes.

    A message must have a value, at least one attribute, or both.
    """
    start_pos = cursor.pos
    body = _parse_entry_body(cursor, context)
    if body is None:
        return None

    name, value, attributes, cursor = body
    if value is None and not attributes:
        return None

    message = Message(
        id=Identifier(name),
        value=value,
        attributes=attributes,
        span=Span(start=start_pos, end=cursor.pos),
    )
    return ParseResult(message, cursor)


def parse_term(cursor: Cursor, context: ParseContext) -> ParseResult[Term] | None:
    """Parse term definition: -term-id = pattern (value required)."""
    start_pos = cursor.pos
    body = _parse_entry_body(cursor.advance(), context)  # Skip -
    if body is None:
        return None

    name, value, attributes, cursor = body
    if value is None:
        return None

    term = Term(
        id=Identifier(name),
        value=value,
        attributes=attributes,
        span=Span(start=start_pos, end=cursor.pos),
    )
    return ParseResult(term, cursor)


def _parse_comment_line(cursor: Cursor) -> tuple[int, str, Cursor] | None:
    """Parse one comment line into (level, content, cursor at line end)."""
    level = 0
    while level < 3 and not cursor.is_eof and cursor.current == "#":
        level += 1
        cursor = cursor.advance()

    if not cursor.is_eof and cursor.current not in (" ", "\n"):
        return None

    if not cursor.is_eof and cursor.current == " ":
        cursor = cursor.advance()

    line_end = cursor.skip_to_line_end()
    return (level, cursor.slice_to(line_end.pos), line_end)


def parse_comment(cursor: Cursor) -> ParseResult[Comment] | None:
    """Parse a comment block.

    Adjacent lines with the same number of "#" are joined into one Comment
    with newline-separated content.
    """
    start_pos = cursor.pos
    first = _parse_comment_line(cursor)
    if first is None:
        return None

    level, content, cursor = first
    lines = [content]

    while not cursor.is_eof:
        next_line = cursor.advance()
        if next_line.source.startswith("#" * level, next_line.pos) and (
            next_line.peek(level) != "#"
        ):
            parsed = _parse_comment_line(next_line)
            if parsed is None:
                break
            _, content, cursor = parsed
            lines.append(content)
        else:
            break

    comment = Comment(
        content="\n".join(lines),
        type=_COMMENT_TYPES[level],
        span=Span(start=start_pos, end=cursor.pos),
    )
    return ParseResult(comment, cursor)
