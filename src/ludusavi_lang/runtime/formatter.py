"""Pattern formatter - converts catalog patterns to text.

Walks the pattern AST, interpolating variables, evaluating selectors and
resolving message and term references. Python 3.13+. Depends on Babel for
number formatting and plural rules.

Error handling:
    Formatting never raises. Problems are collected as FormatWarning
    instances and a readable fallback ({$name}, {message-id},
    {NUMBER(...)}) is rendered in place of the failed placeable.

Thread Safety:
    Per-call state lives in ResolutionContext. The plural-category and
    number-rendering memos are shared per formatter instance, bounded by
    MAX_FORMAT_MEMO_SIZE, and NOT safe for concurrent mutation;
    CatalogRegistry serializes every call through its lock.
"""

import math
from collections import OrderedDict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Generic, TypeAlias, TypeVar, assert_never

from babel.core import UnknownLocaleError
from babel.numbers import format_decimal

from ludusavi_lang.constants import (
    FALLBACK_FUNCTION_ERROR,
    FALLBACK_INVALID,
    FALLBACK_MISSING_MESSAGE,
    FALLBACK_MISSING_TERM,
    FALLBACK_MISSING_VARIABLE,
    MAX_DEPTH,
    MAX_FORMAT_MEMO_SIZE,
)
from ludusavi_lang.diagnostics import (
    CyclicReferenceWarning,
    ErrorTemplate,
    FormatWarning,
    ReferenceWarning,
    ResolutionWarning,
)
from ludusavi_lang.locale_utils import get_babel_locale
from ludusavi_lang.runtime.catalog import MessageCatalog, MessageDefinition
from ludusavi_lang.runtime.plural_rules import select_plural_category
from ludusavi_lang.syntax import (
    Expression,
    FunctionReference,
    Identifier,
    MessageReference,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
)

__all__ = [
    "FormatArgs",
    "FormatValue",
    "FormattedNumber",
    "PatternFormatter",
    "ResolutionContext",
]

FormatValue: TypeAlias = str | int | float | Decimal
FormatArgs: TypeAlias = Mapping[str, FormatValue]

# Default rendering for numeric arguments: grouped, up to three decimals.
_DEFAULT_NUMBER_PATTERN: str = "#,##0.###"
_DEFAULT_MAX_FRACTION_DIGITS: int = 3
_MAX_FRACTION_DIGITS_LIMIT: int = 20

_Number: TypeAlias = int | float | Decimal


@dataclass(frozen=True, slots=True)
class FormattedNumber:
    """Result of NUMBER(): keeps the numeric value for plural selection.

    Attributes:
        value: Original numeric value
        text: Locale-formatted rendering
    """

    value: _Number
    text: str

    def __str__(self) -> str:
        return self.text


_Value: TypeAlias = FormatValue | FormattedNumber


@dataclass(slots=True)
class ResolutionContext:
    """Explicit per-call state for pattern formatting.

    Attributes:
        stack: Message and term keys being resolved (cycle detection)
        max_depth: Maximum reference chain length
    """

    stack: list[str] = field(default_factory=list)
    max_depth: int = MAX_DEPTH

    def push(self, key: str) -> None:
        self.stack.append(key)

    def pop(self) -> str:
        return self.stack.pop()

    def contains(self, key: str) -> bool:
        return key in self.stack

    @property
    def depth(self) -> int:
        return len(self.stack)

    def is_depth_exceeded(self) -> bool:
        return self.depth >= self.max_depth

    def get_cycle_path(self, key: str) -> list[str]:
        return [*self.stack, key]


def _is_number(value: object) -> bool:
    # bool is a subclass of int but never a countable quantity
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _numeric(value: _Value) -> _Number | None:
    """Numeric content of a resolved value, or None for text."""
    if isinstance(value, FormattedNumber):
        return value.value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return value
    return None


def _is_finite(value: _Number) -> bool:
    # NaN never equals itself and sNaN is unhashable, so neither may reach a memo
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def _memo_key(value: _Number) -> tuple[type, _Number | str]:
    # Decimal("1.0") == Decimal("1") but CLDR treats the two differently
    if isinstance(value, Decimal):
        return (Decimal, str(value))
    return (type(value), value)


K = TypeVar("K")
V = TypeVar("V")


class _LruMemo(Generic[K, V]):
    """Bounded mapping evicting the least recently used entry."""

    __slots__ = ("_entries", "_maxsize")

    def __init__(self, maxsize: int) -> None:
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._maxsize = maxsize

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def get(self, key: K) -> V | None:
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
        return value

    def put(self, key: K, value: V) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._maxsize:
            self._entries.popitem(last=False)
        self._entries[key] = value


class PatternFormatter:
    """Formats patterns from one catalog.

    Returns (result, warnings) tuples:
    - result is best-effort text, never None
    - warnings lists every soft failure encountered

    Examples:
        >>> catalog = MessageCatalog.from_source("games = { $n } games", "en-US")
        >>> formatter = PatternFormatter(catalog)
        >>> message = catalog.get_message("games")
        >>> formatter.format(message.value, {"n": 1234})
        ('1,234 games', ())
    """

    __slots__ = ("_catalog", "_number_memo", "_plural_memo")

    def __init__(self, catalog: MessageCatalog, *, memo_size: int = MAX_FORMAT_MEMO_SIZE) -> None:
        self._catalog = catalog
        self._plural_memo: _LruMemo[tuple[type, _Number | str], str] = _LruMemo(memo_size)
        self._number_memo: _LruMemo[tuple[type, _Number | str, str], str] = _LruMemo(memo_size)

    @property
    def catalog(self) -> MessageCatalog:
        return self._catalog

    @property
    def locale(self) -> str:
        return self._catalog.locale

    def memo_info(self) -> dict[str, int]:
        """Current memo sizes and their shared bound.

        Returns:
            Dict with keys "numbers", "plurals" and "maxsize"
        """
        return {
            "numbers": len(self._number_memo),
            "plurals": len(self._plural_memo),
            "maxsize": self._number_memo.maxsize,
        }

    def format(
        self,
        pattern: Pattern,
        args: FormatArgs | None = None,
    ) -> tuple[str, tuple[FormatWarning, ...]]:
        """Format a pattern with arguments.

        Args:
            pattern: Pattern to format
            args: Named arguments; names not referenced by the pattern are ignored

        Returns:
            Tuple of (text, warnings)
        """
        warnings: list[FormatWarning] = []
        result = self._resolve_pattern(pattern, args or {}, warnings, ResolutionContext())
        return (result, tuple(warnings))

    def format_message(
        self,
        message: MessageDefinition,
        args: FormatArgs | None = None,
        attribute: str | None = None,
        *,
        context: ResolutionContext | None = None,
    ) -> tuple[str, tuple[FormatWarning, ...]]:
        """Format a message value or one of its attributes.

        The message key is pushed on the resolution stack so that patterns
        referencing their own message are reported as cycles.

        Args:
            message: Message definition from this formatter's catalog
            args: Named arguments
            attribute: Attribute name, or None for the message value
            context: Resolution context; a fresh one is created when omitted

        Returns:
            Tuple of (text, warnings)
        """
        warnings: list[FormatWarning] = []
        if context is None:
            context = ResolutionContext()
        result = self._resolve_message(message, args or {}, attribute, warnings, context)
        return (result, tuple(warnings))

    # ------------------------------------------------------------------
    # Pattern and expression resolution
    # ------------------------------------------------------------------

    def _resolve_message(
        self,
        message: MessageDefinition,
        args: FormatArgs,
        attribute: str | None,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> str:
        msg_key = f"{message.id}.{attribute}" if attribute else message.id

        if attribute:
            pattern = message.get_attribute(attribute)
            if pattern is None:
                warnings.append(
                    ReferenceWarning(ErrorTemplate.attribute_not_found(attribute, message.id))
                )
                return FALLBACK_MISSING_MESSAGE.format(id=msg_key)
        else:
            if message.value is None:
                warnings.append(ReferenceWarning(ErrorTemplate.message_no_value(message.id)))
                return FALLBACK_MISSING_MESSAGE.format(id=msg_key)
            pattern = message.value

        return self._resolve_guarded(msg_key, pattern, args, warnings, context)

    def _resolve_guarded(
        self,
        key: str,
        pattern: Pattern,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> str:
        """Resolve a referenced pattern with cycle and depth checks."""
        if context.contains(key):
            warnings.append(
                CyclicReferenceWarning(ErrorTemplate.cyclic_reference(context.get_cycle_path(key)))
            )
            return FALLBACK_MISSING_MESSAGE.format(id=key)

        if context.is_depth_exceeded():
            warnings.append(
                ResolutionWarning(ErrorTemplate.max_depth_exceeded(key, context.max_depth))
            )
            return FALLBACK_MISSING_MESSAGE.format(id=key)

        context.push(key)
        try:
            return self._resolve_pattern(pattern, args, warnings, context)
        finally:
            context.pop()

    def _resolve_pattern(
        self,
        pattern: Pattern,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> str:
        parts: list[str] = []
        for element in pattern.elements:
            match element:
                case TextElement():
                    parts.append(element.value)
                case Placeable():
                    try:
                        value = self._resolve_expression(element.expression, args, warnings, context)
                        parts.append(self._format_value(value))
                    except FormatWarning as e:
                        warnings.append(e)
                        parts.append(self._get_fallback_for_placeable(element.expression))
        return "".join(parts)

    def _resolve_expression(  # noqa: PLR0911 - one return per expression type
        self,
        expr: Expression,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> _Value:
        match expr:
            case SelectExpression():
                return self._resolve_select_expression(expr, args, warnings, context)
            case VariableReference():
                return self._resolve_variable_reference(expr, args)
            case MessageReference():
                return self._resolve_message_reference(expr, args, warnings, context)
            case TermReference():
                return self._resolve_term_reference(expr, args, warnings, context)
            case FunctionReference():
                return self._resolve_function_call(expr, args, warnings, context)
            case StringLiteral():
                return expr.value
            case NumberLiteral():
                return expr.value
            case Placeable():
                return self._resolve_expression(expr.expression, args, warnings, context)
            case _:
                assert_never(expr)

    def _resolve_variable_reference(self, expr: VariableReference, args: FormatArgs) -> _Value:
        var_name = expr.id.name
        if var_name not in args:
            raise ReferenceWarning(ErrorTemplate.variable_not_provided(var_name))
        return args[var_name]

    def _resolve_message_reference(
        self,
        expr: MessageReference,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> str:
        message = self._catalog.get_message(expr.id.name)
        if message is None:
            raise ReferenceWarning(ErrorTemplate.message_not_found(expr.id.name))
        attribute = expr.attribute.name if expr.attribute else None
        return self._resolve_message(message, args, attribute, warnings, context)

    def _resolve_term_reference(
        self,
        expr: TermReference,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> str:
        term_id = expr.id.name
        term = self._catalog.get_term(term_id)
        if term is None:
            raise ReferenceWarning(ErrorTemplate.term_not_found(term_id))

        if expr.attribute:
            pattern = term.get_attribute(expr.attribute.name)
            if pattern is None:
                raise ReferenceWarning(
                    ErrorTemplate.term_attribute_not_found(expr.attribute.name, term_id)
                )
            term_key = f"-{term_id}.{expr.attribute.name}"
        else:
            # Terms always carry a value; the parser rejects value-less terms
            pattern = term.value or Pattern(elements=())
            term_key = f"-{term_id}"

        return self._resolve_guarded(term_key, pattern, args, warnings, context)

    def _find_exact_variant(
        self, variants: Sequence[Variant], selector_value: _Value
    ) -> Variant | None:
        """Pass 1: variant whose key equals the selector."""
        number = _numeric(selector_value)
        if number is not None and not _is_finite(number):
            number = None
        for variant in variants:
            match variant.key:
                case Identifier(name=key_name):
                    if isinstance(selector_value, str) and key_name == selector_value:
                        return variant
                case NumberLiteral(value=key_value):
                    if number is not None and Decimal(str(key_value)) == Decimal(str(number)):
                        return variant
        return None

    def _find_plural_variant(
        self, variants: Sequence[Variant], plural_category: str
    ) -> Variant | None:
        """Pass 2: variant keyed by the CLDR plural category."""
        for variant in variants:
            match variant.key:
                case Identifier(name=key_name):
                    if key_name == plural_category:
                        return variant
        return None

    def _find_default_variant(self, variants: Sequence[Variant]) -> Variant:
        for variant in variants:
            if variant.default:
                return variant
        raise ResolutionWarning(ErrorTemplate.no_variants())

    def _resolve_select_expression(
        self,
        expr: SelectExpression,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> str:
        """Resolve select expression by matching variant.

        Matching priority:
            1. Exact string/number match
            2. Plural category match for numeric selectors
            3. Default variant (also used when the selector fails)
        """
        try:
            selector_value = self._resolve_expression(expr.selector, args, warnings, context)
        except FormatWarning as e:
            warnings.append(e)
            default = self._find_default_variant(expr.variants)
            return self._resolve_pattern(default.value, args, warnings, context)

        variant = self._find_exact_variant(expr.variants, selector_value)

        number = _numeric(selector_value)
        if variant is None and number is not None:
            category = self._plural_category(number)
            if category is not None:
                variant = self._find_plural_variant(expr.variants, category)

        if variant is None:
            variant = self._find_default_variant(expr.variants)

        return self._resolve_pattern(variant.value, args, warnings, context)

    def _resolve_function_call(
        self,
        func_ref: FunctionReference,
        args: FormatArgs,
        warnings: list[FormatWarning],
        context: ResolutionContext,
    ) -> FormattedNumber:
        """Evaluate a function call. NUMBER() is the only built-in."""
        func_name = func_ref.id.name
        if func_name != "NUMBER":
            raise ResolutionWarning(ErrorTemplate.function_not_found(func_name))

        positional = [
            self._resolve_expression(arg, args, warnings, context)
            for arg in func_ref.arguments.positional
        ]
        options = {arg.name.name: arg.value.value for arg in func_ref.arguments.named}

        if len(positional) != 1:
            raise ResolutionWarning(
                ErrorTemplate.function_failed(
                    func_name, f"expected 1 positional argument, got {len(positional)}"
                )
            )

        value = positional[0]
        if isinstance(value, FormattedNumber):
            value = value.value
        if isinstance(value, bool):
            raise ResolutionWarning(
                ErrorTemplate.function_failed(func_name, f"not a number: {value!r}")
            )
        if isinstance(value, str):
            try:
                value = Decimal(value)
            except InvalidOperation as e:
                raise ResolutionWarning(
                    ErrorTemplate.function_failed(func_name, f"not a number: {value!r}")
                ) from e

        try:
            number_pattern = self._number_pattern(options)
        except (TypeError, ValueError) as e:
            raise ResolutionWarning(ErrorTemplate.function_failed(func_name, str(e))) from e

        return FormattedNumber(value=value, text=self._format_number(value, number_pattern))

    # ------------------------------------------------------------------
    # Numbers and plural categories (memoized)
    # ------------------------------------------------------------------

    @staticmethod
    def _number_pattern(options: Mapping[str, str | int | float]) -> str:
        """Build a CLDR decimal pattern from NUMBER() options.

        Supported options: minimumFractionDigits, maximumFractionDigits,
        useGrouping ("true"/"false").
        """
        unknown = set(options) - {"minimumFractionDigits", "maximumFractionDigits", "useGrouping"}
        if unknown:
            msg = f"unsupported option(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        minimum = int(options.get("minimumFractionDigits", 0))
        maximum = int(options.get("maximumFractionDigits", max(minimum, _DEFAULT_MAX_FRACTION_DIGITS)))
        if not 0 <= minimum <= maximum <= _MAX_FRACTION_DIGITS_LIMIT:
            msg = f"invalid fraction digits: minimum={minimum}, maximum={maximum}"
            raise ValueError(msg)

        grouping = str(options.get("useGrouping", "true")).lower()
        if grouping not in ("true", "false"):
            msg = f"useGrouping must be 'true' or 'false', got {grouping!r}"
            raise ValueError(msg)

        integer_part = "#,##0" if grouping == "true" else "0"
        fraction_part = "0" * minimum + "#" * (maximum - minimum)
        return f"{integer_part}.{fraction_part}" if fraction_part else integer_part

    def _format_number(self, value: _Number, number_pattern: str = _DEFAULT_NUMBER_PATTERN) -> str:
        """Render a number with Babel.

        Raises:
            ResolutionWarning: If the value is not finite or Babel rejects it
        """
        if not _is_finite(value):
            raise ResolutionWarning(ErrorTemplate.number_format_failed(value, "not finite"))

        key = (*_memo_key(value), number_pattern)
        cached = self._number_memo.get(key)
        if cached is not None:
            return cached
        try:
            babel_locale = get_babel_locale(self.locale)
        except (UnknownLocaleError, ValueError):
            rendered = str(value)
        else:
            try:
                rendered = format_decimal(value, format=number_pattern, locale=babel_locale)
            except (ValueError, TypeError, InvalidOperation, OverflowError) as e:
                raise ResolutionWarning(ErrorTemplate.number_format_failed(value, str(e))) from e
        self._number_memo.put(key, rendered)
        return rendered

    def _plural_category(self, value: _Number) -> str | None:
        """CLDR category of a finite number; None sends selection to the default."""
        if not _is_finite(value):
            return None
        key = _memo_key(value)
        category = self._plural_memo.get(key)
        if category is None:
            try:
                category = select_plural_category(value, self.locale)
            except (ValueError, TypeError, InvalidOperation, OverflowError):
                return None
            self._plural_memo.put(key, category)
        return category

    def _format_value(self, value: _Value) -> str:
        """Render a resolved value as text."""
        if isinstance(value, str):
            return value
        # bool first: it is an int subclass
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, FormattedNumber):
            return value.text
        if _is_number(value):
            return self._format_number(value)
        return str(value)

    def _get_fallback_for_placeable(self, expr: Expression) -> str:
        """Readable fallback for a failed placeable.

        Examples:
            VariableReference($path) -> "{$path}"
            MessageReference(button-backup) -> "{button-backup}"
            TermReference(-brand) -> "{-brand}"
            FunctionReference(NUMBER) -> "{NUMBER(...)}"
        """
        match expr:
            case VariableReference():
                return FALLBACK_MISSING_VARIABLE.format(name=expr.id.name)
            case MessageReference():
                attr_suffix = f".{expr.attribute.name}" if expr.attribute else ""
                return FALLBACK_MISSING_MESSAGE.format(id=f"{expr.id.name}{attr_suffix}")
            case TermReference():
                attr_suffix = f".{expr.attribute.name}" if expr.attribute else ""
                return FALLBACK_MISSING_TERM.format(name=f"{expr.id.name}{attr_suffix}")
            case FunctionReference():
                return FALLBACK_FUNCTION_ERROR.format(name=expr.id.name)
            case Placeable():
                return self._get_fallback_for_placeable(expr.expression)
            case _:
                return FALLBACK_INVALID
