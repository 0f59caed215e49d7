"""CatalogRegistry - lazily loaded catalog behind one lock.

The registry owns the loaded MessageCatalog and the PatternFormatter built
on it. Loading happens once, on first use. Every formatting call runs with
the registry lock held, because the formatter's plural and number memos are
shared mutable state.

Lock waits are bounded. A caller that cannot get the lock in time receives
None from locked() and must degrade instead of failing.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeAlias

from ludusavi_lang.constants import LOCK_TIMEOUT
from ludusavi_lang.diagnostics import ErrorTemplate
from ludusavi_lang.enums import Language
from ludusavi_lang.runtime.catalog import MessageCatalog, load_catalog
from ludusavi_lang.runtime.formatter import PatternFormatter

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

__all__ = ["CatalogRegistry", "get_default_registry"]

logger = logging.getLogger(__name__)

CatalogLoader: TypeAlias = "Callable[[Language], MessageCatalog]"


class CatalogRegistry:
    """Thread-safe, lazily initialized holder of one catalog.

    Thread Safety:
        get_or_init() uses double-checked locking on a dedicated init lock,
        so concurrent first calls load the catalog exactly once. locked()
        serializes formatting through a second, non-reentrant lock.

    Example:
        >>> registry = CatalogRegistry()
        >>> with registry.locked() as held:
        ...     if held is not None:
        ...         catalog, formatter = held
    """

    __slots__ = ("_init_lock", "_language", "_loaded", "_loader", "_lock", "_lock_timeout")

    def __init__(
        self,
        language: Language = Language.ENGLISH,
        *,
        loader: CatalogLoader = load_catalog,
        lock_timeout: float = LOCK_TIMEOUT,
    ) -> None:
        """Initialize registry without loading anything.

        Args:
            language: Language whose catalog is loaded on first use
            loader: Callable producing the catalog (keyword-only)
            lock_timeout: Seconds to wait for the formatting lock (keyword-only)

        Raises:
            ValueError: If lock_timeout is negative
        """
        if lock_timeout < 0:
            msg = f"Lock timeout must be non-negative, got {lock_timeout}"
            raise ValueError(msg)
        self._language = language
        self._loader = loader
        self._lock_timeout = lock_timeout
        self._init_lock = threading.Lock()
        self._lock = threading.Lock()
        self._loaded: tuple[MessageCatalog, PatternFormatter] | None = None

    @property
    def language(self) -> Language:
        return self._language

    @property
    def lock_timeout(self) -> float:
        return self._lock_timeout

    @property
    def is_initialized(self) -> bool:
        """True once the catalog has been loaded."""
        return self._loaded is not None

    def get_or_init(self) -> MessageCatalog:
        """Return the catalog, loading it on first call.

        Raises:
            CatalogSyntaxError: If the catalog fails to parse. Nothing is
                cached in that case; every later call raises again.
        """
        return self._ensure_loaded()[0]

    def _ensure_loaded(self) -> tuple[MessageCatalog, PatternFormatter]:
        loaded = self._loaded
        if loaded is not None:
            return loaded

        with self._init_lock:
            if self._loaded is None:
                catalog = self._loader(self._language)
                self._loaded = (catalog, PatternFormatter(catalog))
                logger.info(
                    "Catalog registry initialized for %s: %d messages",
                    self._language.id,
                    len(catalog),
                )
            return self._loaded

    @contextmanager
    def locked(
        self, timeout: float | None = None
    ) -> Generator[tuple[MessageCatalog, PatternFormatter] | None]:
        """Hold the formatting lock for the duration of the block.

        Args:
            timeout: Seconds to wait; None uses the registry's lock_timeout

        Yields:
            (catalog, formatter) while the lock is held, or None if the lock
            could not be acquired in time

        Raises:
            CatalogSyntaxError: If the catalog has not been loaded yet and
                fails to parse
        """
        loaded = self._ensure_loaded()
        wait = self._lock_timeout if timeout is None else timeout

        if not self._lock.acquire(timeout=wait):
            logger.warning("%s", ErrorTemplate.lock_unavailable(wait))
            yield None
            return

        try:
            yield loaded
        finally:
            self._lock.release()


# Process-wide convenience instance. This module is its only owner.
_default_registry: CatalogRegistry | None = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> CatalogRegistry:
    """Return the shared English registry, creating it on first call.

    Creating the registry does not load the catalog; that still happens
    lazily on first use.
    """
    # Lazy initialization of module-level singleton.
    global _default_registry  # noqa: PLW0603
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = CatalogRegistry()
    return _default_registry
