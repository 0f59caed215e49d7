"""Catalog parser package.

Module Organization:
- core.py: CatalogParser and the parse() entry point
- primitives.py: Basic parsers (identifiers, numbers, strings)
- rules.py: All grammar rules (patterns, expressions, entries)
"""

from ludusavi_lang.syntax.parser.core import CatalogParser
from ludusavi_lang.syntax.parser.rules import ParseContext

__all__ = ["CatalogParser", "ParseContext"]
