"""MessageCatalog - parsed, immutable message definitions for one locale.

Python 3.13+.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from importlib.resources import files
from types import MappingProxyType

from ludusavi_lang.diagnostics import CatalogSyntaxError, ErrorTemplate
from ludusavi_lang.enums import Language
from ludusavi_lang.syntax import CatalogParser, Cursor, Junk, Message, Pattern, Span, Term
from ludusavi_lang.syntax.parser.core import normalize_line_endings

__all__ = ["MessageCatalog", "MessageDefinition", "load_catalog"]

logger = logging.getLogger(__name__)

_LOG_TRUNCATE_WARNING: int = 100


@dataclass(frozen=True, slots=True)
class MessageDefinition:
    """A message (or term) as stored in the catalog.

    Attributes:
        id: Message identifier (without the leading "-" for terms)
        value: Default pattern, or None for attribute-only messages
        attributes: Attribute name -> pattern
    """

    id: str
    value: Pattern | None
    attributes: Mapping[str, Pattern] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.value is None and not self.attributes:
            msg = f"Message '{self.id}' must have a value or at least one attribute"
            raise ValueError(msg)
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_entry(cls, entry: Message | Term) -> "MessageDefinition":
        """Build a definition from a parsed message or term."""
        return cls(
            id=entry.id.name,
            value=entry.value,
            attributes={attr.id.name: attr.value for attr in entry.attributes},
        )

    def get_attribute(self, name: str) -> Pattern | None:
        """Return the attribute pattern, or None if undefined."""
        return self.attributes.get(name)


class MessageCatalog:
    """Immutable id -> MessageDefinition mapping for one locale.

    Built once from FTL source and never modified. Any syntax error in the
    source is fatal: a catalog with Junk would silently render sentinels
    for every message lost to the error.

    Examples:
        >>> catalog = MessageCatalog.from_source("button-backup = Back up", "en-US")
        >>> catalog.has_message("button-backup")
        True
        >>> catalog.get_message("button-backup").id
        'button-backup'
    """

    __slots__ = ("_locale", "_messages", "_source_path", "_terms")

    def __init__(
        self,
        locale: str,
        messages: Mapping[str, MessageDefinition],
        terms: Mapping[str, MessageDefinition] | None = None,
        *,
        source_path: str | None = None,
    ) -> None:
        self._locale = locale
        self._messages = MappingProxyType(dict(messages))
        self._terms = MappingProxyType(dict(terms or {}))
        self._source_path = source_path

    @classmethod
    def from_source(
        cls,
        source: str,
        locale: str,
        *,
        source_path: str | None = None,
    ) -> "MessageCatalog":
        """Parse FTL source into a catalog.

        Args:
            source: FTL source text
            locale: BCP-47 locale id the catalog is written for
            source_path: Resource name used in log and error messages

        Returns:
            New MessageCatalog

        Raises:
            CatalogSyntaxError: On any Junk entry, duplicate message id or
                oversized source
        """
        source_desc = source_path or "<string>"
        try:
            resource = CatalogParser().parse(source)
            normalized = normalize_line_endings(source)

            messages: dict[str, MessageDefinition] = {}
            terms: dict[str, MessageDefinition] = {}
            for entry in resource.entries:
                match entry:
                    case Message():
                        if entry.id.name in messages:
                            raise CatalogSyntaxError(
                                ErrorTemplate.duplicate_message(
                                    entry.id.name,
                                    _describe_location(source_desc, normalized, entry.span),
                                )
                            )
                        messages[entry.id.name] = MessageDefinition.from_entry(entry)
                    case Term():
                        terms[entry.id.name] = MessageDefinition.from_entry(entry)
                    case Junk():
                        logger.warning(
                            "Syntax error in %s: %s",
                            source_desc,
                            repr(entry.content[:_LOG_TRUNCATE_WARNING]),
                        )
                        raise CatalogSyntaxError(
                            ErrorTemplate.parse_junk(
                                _describe_location(source_desc, normalized, entry.span),
                                entry.content[:_LOG_TRUNCATE_WARNING],
                            )
                        )
                    case _:
                        pass
        except CatalogSyntaxError as e:
            logger.error("Failed to parse catalog %s: %s", source_desc, e)
            raise

        logger.info(
            "Loaded catalog %s (%s): %d messages, %d terms",
            source_desc,
            locale,
            len(messages),
            len(terms),
        )
        return cls(locale, messages, terms, source_path=source_path)

    @property
    def locale(self) -> str:
        """Locale id the catalog is written for."""
        return self._locale

    @property
    def source_path(self) -> str | None:
        """Resource name the catalog was loaded from, if known."""
        return self._source_path

    def get_message(self, message_id: str) -> MessageDefinition | None:
        return self._messages.get(message_id)

    def has_message(self, message_id: str) -> bool:
        return message_id in self._messages

    def has_attribute(self, message_id: str, attribute: str) -> bool:
        message = self._messages.get(message_id)
        return message is not None and attribute in message.attributes

    def get_term(self, term_id: str) -> MessageDefinition | None:
        """Look up a term by id without the leading '-'."""
        return self._terms.get(term_id)

    def message_ids(self) -> frozenset[str]:
        return frozenset(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __repr__(self) -> str:
        return f"MessageCatalog(locale={self._locale!r}, messages={len(self._messages)})"


def _describe_location(source_desc: str, source: str, span: Span | None) -> str:
    """Render "path:line:col" for an entry span."""
    start = span.start if span is not None else 0
    line, col = Cursor(source, start).compute_line_col()
    return f"{source_desc}:{line}:{col}"


def load_catalog(language: Language) -> MessageCatalog:
    """Load the catalog bundled for a language.

    Reads ``resources/<locale-id>.ftl`` from the installed package.

    Raises:
        CatalogSyntaxError: If the bundled resource does not parse cleanly
        FileNotFoundError: If no resource exists for the language
    """
    resource = files("ludusavi_lang").joinpath("resources", f"{language.id}.ftl")
    source = resource.read_text(encoding="utf-8")
    return MessageCatalog.from_source(
        source, language.id, source_path=f"resources/{language.id}.ftl"
    )
