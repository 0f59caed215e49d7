"""Shared constants for ludusavi-lang.

Centralized configuration used across the syntax, runtime and facade layers.
Placing constants here avoids circular imports between those packages.

Constants are grouped by domain:
- Limits: recursion and input size protection
- Concurrency: lock wait bounds
- Fallback strings: placeholders rendered for failed placeables
- Sentinels: diagnostic strings returned instead of failing a lookup
- Environment: variables consulted for the window title

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Limits
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
    # Concurrency
    "LOCK_TIMEOUT",
    # Cache limits
    "MAX_FORMAT_MEMO_SIZE",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_MESSAGE",
    "FALLBACK_MISSING_VARIABLE",
    "FALLBACK_MISSING_TERM",
    "FALLBACK_FUNCTION_ERROR",
    # Sentinels
    "SENTINEL_CANNOT_LOCK",
    "SENTINEL_NO_MESSAGE",
    "SENTINEL_NO_MESSAGE_VALUE",
    "SENTINEL_NO_ATTRIBUTE",
    "SENTINEL_PREFIXES",
    # Environment
    "ENV_VERSION",
    "ENV_VARIANT",
]

# ============================================================================
# LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by the parser (placeable nesting) and the formatter (reference chains).
MAX_DEPTH: int = 100

# Maximum catalog source size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# CONCURRENCY
# ============================================================================

# Upper bound in seconds on waiting for the catalog lock.
# Formatting is CPU-only and brief; a wait this long means something is stuck.
LOCK_TIMEOUT: float = 5.0

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Entries kept per formatter memo (plural categories, number renderings).
# Least recently used entries are evicted past this size.
MAX_FORMAT_MEMO_SIZE: int = 1000

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendered in place of a placeable that could not be resolved.
# These are format strings - use .format(name=...) or .format(id=...)
FALLBACK_INVALID: str = "{???}"
FALLBACK_MISSING_MESSAGE: str = "{{{id}}}"  # e.g., {my-message}
FALLBACK_MISSING_VARIABLE: str = "{{${name}}}"  # e.g., {$path}
FALLBACK_MISSING_TERM: str = "{{-{name}}}"  # e.g., {-brand}
FALLBACK_FUNCTION_ERROR: str = "{{{name}(...)}}"  # e.g., {NUMBER(...)}

# ============================================================================
# SENTINELS
# ============================================================================

# Returned by MessageResolver.resolve() instead of raising.
# Kept greppable: every sentinel starts with "fluent-".
SENTINEL_CANNOT_LOCK: str = "fluent-cannot-lock"
SENTINEL_NO_MESSAGE: str = "fluent-no-message={id}"
SENTINEL_NO_MESSAGE_VALUE: str = "fluent-no-message-value={id}"
SENTINEL_NO_ATTRIBUTE: str = "fluent-no-attr={id}"

SENTINEL_PREFIXES: tuple[str, ...] = (
    SENTINEL_CANNOT_LOCK,
    "fluent-no-message=",
    "fluent-no-message-value=",
    "fluent-no-attr=",
)

# ============================================================================
# ENVIRONMENT
# ============================================================================

ENV_VERSION: str = "LUDUSAVI_VERSION"
ENV_VARIANT: str = "LUDUSAVI_VARIANT"
