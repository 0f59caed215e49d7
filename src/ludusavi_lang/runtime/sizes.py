"""Human-readable byte sizes.

Binary (IEC) units, formatted with Babel so grouping and decimal symbols
follow the locale.

Python 3.13+. Depends on Babel.
"""

from decimal import Decimal

from babel.numbers import format_decimal

from ludusavi_lang.locale_utils import get_babel_locale

__all__ = ["BINARY_UNITS", "adjusted_size"]

BINARY_UNITS: tuple[str, ...] = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")

_UNIT_STEP: int = 1024

# At most two decimals, trailing zeros trimmed.
_SIZE_PATTERN: str = "#,##0.##"


def adjusted_size(num_bytes: int, locale: str = "en-US") -> str:
    """Format a byte count in the largest unit whose scaled value is >= 1.

    Exact arithmetic (Decimal) keeps unit selection and rounding
    deterministic; a value exactly at a threshold moves to the larger unit.

    Args:
        num_bytes: Non-negative byte count
        locale: Locale for number formatting

    Returns:
        Size string such as "1,023 B", "1 KiB" or "1.5 GiB"

    Raises:
        ValueError: If num_bytes is negative

    Examples:
        >>> adjusted_size(0)
        '0 B'
        >>> adjusted_size(1024)
        '1 KiB'
        >>> adjusted_size(1536)
        '1.5 KiB'
    """
    if num_bytes < 0:
        msg = f"Byte count must be non-negative, got {num_bytes}"
        raise ValueError(msg)

    value = Decimal(num_bytes)
    unit_index = 0
    while value >= _UNIT_STEP and unit_index < len(BINARY_UNITS) - 1:
        value /= _UNIT_STEP
        unit_index += 1

    number = format_decimal(value, format=_SIZE_PATTERN, locale=get_babel_locale(locale))
    return f"{number} {BINARY_UNITS[unit_index]}"
