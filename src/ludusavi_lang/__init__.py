"""ludusavi-lang - localized text for the Ludusavi backup utility.

Loads the bundled Fluent (FTL) catalog, formats messages with locale-aware
numbers and plural rules, reflows hand-wrapped catalog text and renders
byte sizes.

Public API:
    Translator - Typed accessor for every user-facing string
    MessageResolver - Message id lookup with diagnostic sentinels
    CatalogRegistry - Lazily loaded catalog behind one lock
    MessageCatalog - Parsed, immutable catalog
    adjusted_size - Human-readable binary byte sizes
    normalize_text - Whitespace and paragraph reflow

Exceptions:
    LangError - Base exception class
    CatalogSyntaxError - The catalog could not be parsed (fatal)

Submodules:
    ludusavi_lang.syntax - AST, cursor and parser
    ludusavi_lang.runtime - Catalog, formatter, registry, resolver
    ludusavi_lang.domain - Domain values rendered by the Translator
    ludusavi_lang.diagnostics - Diagnostic codes, templates and exceptions
"""

from .diagnostics import CatalogSyntaxError, LangError
from .enums import Language, MissingKind
from .runtime import (
    CatalogRegistry,
    MessageCatalog,
    MessageResolver,
    MissingText,
    ResolvedText,
    adjusted_size,
    get_default_registry,
    normalize_text,
)
from .translator import Translator

# Version information - Auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("ludusavi-lang")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogRegistry",
    "CatalogSyntaxError",
    "LangError",
    "Language",
    "MessageCatalog",
    "MessageResolver",
    "MissingKind",
    "MissingText",
    "ResolvedText",
    "Translator",
    "__version__",
    "adjusted_size",
    "get_default_registry",
    "normalize_text",
]
