"""MessageResolver - id lookup with diagnostic sentinels.

resolve() is total: it always returns displayable text. Lookups that cannot
produce a translation return a greppable sentinel instead:

    fluent-cannot-lock              catalog lock not acquired in time
    fluent-no-message=<id>          message not in catalog
    fluent-no-attr=<id>             message lacks the requested attribute
    fluent-no-message-value=<id>    message has attributes only

resolve_tagged() exposes the same outcome as ResolvedText | MissingText
for callers that need to detect degradation.

Python 3.13+.
"""

import logging
from dataclasses import dataclass
from typing import TypeAlias, assert_never

from ludusavi_lang.constants import (
    SENTINEL_CANNOT_LOCK,
    SENTINEL_NO_ATTRIBUTE,
    SENTINEL_NO_MESSAGE,
    SENTINEL_NO_MESSAGE_VALUE,
)
from ludusavi_lang.diagnostics import ErrorTemplate, FormatWarning
from ludusavi_lang.enums import MissingKind
from ludusavi_lang.runtime.formatter import FormatArgs
from ludusavi_lang.runtime.normalizer import normalize_text
from ludusavi_lang.runtime.registry import CatalogRegistry, get_default_registry

__all__ = ["MessageResolver", "MissingText", "Resolution", "ResolvedText"]

logger = logging.getLogger(__name__)

_LOG_TRUNCATE_DEBUG: int = 50


@dataclass(frozen=True, slots=True)
class ResolvedText:
    """Successfully formatted and normalized message.

    Attributes:
        text: Final text
        warnings: Soft formatting failures (e.g. a missing argument rendered as {$name})
    """

    text: str
    warnings: tuple[FormatWarning, ...] = ()


@dataclass(frozen=True, slots=True)
class MissingText:
    """Lookup that produced no translation.

    Attributes:
        kind: Why the lookup failed
        message_id: The full requested id, including any attribute suffix
    """

    kind: MissingKind
    message_id: str

    def sentinel(self) -> str:
        """Render the diagnostic string for this failure."""
        match self.kind:
            case MissingKind.CANNOT_LOCK:
                return SENTINEL_CANNOT_LOCK
            case MissingKind.NO_MESSAGE:
                return SENTINEL_NO_MESSAGE.format(id=self.message_id)
            case MissingKind.NO_ATTRIBUTE:
                return SENTINEL_NO_ATTRIBUTE.format(id=self.message_id)
            case MissingKind.NO_VALUE:
                return SENTINEL_NO_MESSAGE_VALUE.format(id=self.message_id)
            case _:
                assert_never(self.kind)


Resolution: TypeAlias = ResolvedText | MissingText


def split_message_id(message_id: str) -> tuple[str, str | None]:
    """Split "message.attribute" on the first dot.

    Examples:
        >>> split_message_id("button-backup")
        ('button-backup', None)
        >>> split_message_id("cli-summary.succeeded")
        ('cli-summary', 'succeeded')
        >>> split_message_id("a.b.c")
        ('a', 'b.c')
    """
    name, sep, attribute = message_id.partition(".")
    return (name, attribute if sep else None)


class MessageResolver:
    """Resolves message ids against a CatalogRegistry.

    Never raises for a missing or malformed translation. The only exception
    that can escape is CatalogSyntaxError on first use, when the catalog
    itself cannot be loaded.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: CatalogRegistry | None = None) -> None:
        """Initialize resolver.

        Args:
            registry: Registry to resolve against; defaults to the shared
                process-wide registry
        """
        self._registry = registry if registry is not None else get_default_registry()

    @property
    def registry(self) -> CatalogRegistry:
        return self._registry

    def resolve_tagged(self, message_id: str, args: FormatArgs | None = None) -> Resolution:
        """Resolve a message id to a tagged result.

        Args:
            message_id: "message-id" or "message-id.attribute"
            args: Named arguments for the pattern

        Returns:
            ResolvedText with normalized text, or MissingText
        """
        name, attribute = split_message_id(message_id)

        with self._registry.locked() as held:
            if held is None:
                return MissingText(MissingKind.CANNOT_LOCK, message_id)

            catalog, formatter = held
            message = catalog.get_message(name)
            if message is None:
                logger.warning("%s", ErrorTemplate.message_not_found(name))
                return MissingText(MissingKind.NO_MESSAGE, message_id)

            if attribute is not None:
                if not catalog.has_attribute(name, attribute):
                    logger.warning("%s", ErrorTemplate.attribute_not_found(attribute, name))
                    return MissingText(MissingKind.NO_ATTRIBUTE, message_id)
            elif message.value is None:
                logger.warning("%s", ErrorTemplate.message_no_value(name))
                return MissingText(MissingKind.NO_VALUE, message_id)

            text, warnings = formatter.format_message(message, args, attribute)

        if warnings:
            logger.warning(
                "Message resolution errors for '%s': %d error(s)", message_id, len(warnings)
            )
            for warning in warnings:
                logger.debug("  - %s: %s", type(warning).__name__, warning)

        text = normalize_text(text)
        if not warnings:
            logger.debug("Resolved message '%s': %s", message_id, text[:_LOG_TRUNCATE_DEBUG])
        return ResolvedText(text, warnings)

    def resolve(self, message_id: str, args: FormatArgs | None = None) -> str:
        """Resolve a message id to text, or to a diagnostic sentinel.

        Example:
            >>> resolver = MessageResolver()
            >>> resolver.resolve("no-such-message")
            'fluent-no-message=no-such-message'
        """
        match self.resolve_tagged(message_id, args):
            case ResolvedText(text=text):
                return text
            case MissingText() as missing:
                return missing.sentinel()
