"""Bridging Language ids to Babel.

Ludusavi names languages the BCP-47 way (``pt-BR``, ``zh-Hans``) while Babel
parses POSIX-style identifiers (``pt_BR``). Everything that talks to Babel
goes through get_babel_locale so the conversion happens in one place.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Swap BCP-47 hyphens for Babel's underscores.

    >>> normalize_locale("zh-Hans")
    'zh_Hans'
    >>> normalize_locale("pl")
    'pl'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=64)
def get_babel_locale(locale_code: str) -> Locale:
    """Parsed Babel Locale for a language id, cached per id.

    Raises:
        babel.core.UnknownLocaleError: Babel has no CLDR data for the id.
        ValueError: The id is not a well-formed locale identifier.
    """
    # Deferred: importing babel pulls in CLDR data
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
