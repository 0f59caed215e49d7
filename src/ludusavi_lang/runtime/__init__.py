"""Runtime: catalog, formatting, normalization and resolution.

Python 3.13+. Depends on Babel for CLDR data.
"""

from .catalog import MessageCatalog, MessageDefinition, load_catalog
from .formatter import FormatArgs, FormattedNumber, FormatValue, PatternFormatter
from .normalizer import collapse_spaces, join_soft_lines, normalize_paragraphs, normalize_text
from .plural_rules import select_plural_category
from .registry import CatalogRegistry, get_default_registry
from .resolver import MessageResolver, MissingText, Resolution, ResolvedText
from .sizes import adjusted_size

__all__ = [
    "CatalogRegistry",
    "FormatArgs",
    "FormatValue",
    "FormattedNumber",
    "MessageCatalog",
    "MessageDefinition",
    "MessageResolver",
    "MissingText",
    "PatternFormatter",
    "Resolution",
    "ResolvedText",
    "adjusted_size",
    "collapse_spaces",
    "get_default_registry",
    "join_soft_lines",
    "load_catalog",
    "normalize_paragraphs",
    "normalize_text",
    "select_plural_category",
]
