"""CLDR plural category selection using Babel.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from decimal import Decimal

from babel.core import UnknownLocaleError

from ludusavi_lang.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]


def select_plural_category(n: int | float | Decimal, locale: str) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "en-US", "en_US")

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en-US")
        'one'
        >>> select_plural_category(0, "en-US")
        'other'

    If the locale cannot be parsed, falls back to a one/other rule.
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return "one" if abs(n) == 1 else "other"

    return locale_obj.plural_form(n)
