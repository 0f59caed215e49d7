"""CatalogRegistry lifecycle and locking tests."""

import logging
import threading

import pytest

from ludusavi_lang.diagnostics import CatalogSyntaxError
from ludusavi_lang.enums import Language
from ludusavi_lang.runtime import (
    CatalogRegistry,
    MessageCatalog,
    PatternFormatter,
    get_default_registry,
)


class _CountingLoader:
    """Loader that records how often it is called."""

    def __init__(self, source: str = "hello = Hello") -> None:
        self.source = source
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, language: Language) -> MessageCatalog:
        with self._lock:
            self.calls += 1
        return MessageCatalog.from_source(self.source, language.id)


class TestLazyInitialization:
    """The catalog is loaded on first use, exactly once."""

    def test_construction_does_not_load(self) -> None:
        loader = _CountingLoader()
        registry = CatalogRegistry(loader=loader)
        assert not registry.is_initialized
        assert loader.calls == 0

    def test_get_or_init_loads_once(self) -> None:
        loader = _CountingLoader()
        registry = CatalogRegistry(loader=loader)

        first = registry.get_or_init()
        second = registry.get_or_init()

        assert first is second
        assert registry.is_initialized
        assert loader.calls == 1

    def test_concurrent_first_use_loads_once(self) -> None:
        loader = _CountingLoader()
        registry = CatalogRegistry(loader=loader)
        barrier = threading.Barrier(8)
        results: list[MessageCatalog] = []
        results_lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            catalog = registry.get_or_init()
            with results_lock:
                results.append(catalog)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert loader.calls == 1
        assert len(results) == 8
        assert all(catalog is results[0] for catalog in results)

    def test_parse_failure_propagates_and_is_not_cached(self) -> None:
        loader = _CountingLoader("broken = { $x\n")
        registry = CatalogRegistry(loader=loader)

        with pytest.raises(CatalogSyntaxError):
            registry.get_or_init()
        with pytest.raises(CatalogSyntaxError):
            registry.get_or_init()

        assert not registry.is_initialized
        assert loader.calls == 2

    def test_initialization_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = CatalogRegistry(loader=_CountingLoader())
        with caplog.at_level(logging.INFO, logger="ludusavi_lang.runtime.registry"):
            registry.get_or_init()
        assert "Catalog registry initialized for en-US: 1 messages" in caplog.text


class TestLocked:
    """Formatting lock with bounded waits."""

    def test_yields_catalog_and_formatter(self) -> None:
        registry = CatalogRegistry(loader=_CountingLoader())
        with registry.locked() as held:
            assert held is not None
            catalog, formatter = held
            assert catalog is registry.get_or_init()
            assert isinstance(formatter, PatternFormatter)
            assert formatter.catalog is catalog

    def test_lock_released_after_block(self) -> None:
        registry = CatalogRegistry(loader=_CountingLoader(), lock_timeout=0)
        with registry.locked() as held:
            assert held is not None
        with registry.locked() as held:
            assert held is not None

    def test_lock_released_on_exception(self) -> None:
        registry = CatalogRegistry(loader=_CountingLoader(), lock_timeout=0)
        with pytest.raises(RuntimeError), registry.locked():
            raise RuntimeError("boom")
        with registry.locked() as held:
            assert held is not None

    def test_timeout_yields_none(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = CatalogRegistry(loader=_CountingLoader(), lock_timeout=0.05)
        holding = threading.Event()
        release = threading.Event()

        def holder() -> None:
            with registry.locked() as held:
                assert held is not None
                holding.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=holder)
        thread.start()
        try:
            assert holding.wait(timeout=5)
            with (
                caplog.at_level(logging.WARNING, logger="ludusavi_lang.runtime.registry"),
                registry.locked() as held,
            ):
                assert held is None
        finally:
            release.set()
            thread.join()

        assert "Catalog lock not acquired within 0.05s" in caplog.text

    def test_explicit_timeout_overrides_default(self) -> None:
        registry = CatalogRegistry(loader=_CountingLoader(), lock_timeout=60)
        holding = threading.Event()
        release = threading.Event()

        def holder() -> None:
            with registry.locked():
                holding.set()
                release.wait(timeout=5)

        thread = threading.Thread(target=holder)
        thread.start()
        try:
            assert holding.wait(timeout=5)
            with registry.locked(timeout=0) as held:
                assert held is None
        finally:
            release.set()
            thread.join()


class TestConfiguration:
    """Constructor arguments and the shared instance."""

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            CatalogRegistry(lock_timeout=-1)

    def test_properties(self) -> None:
        registry = CatalogRegistry(loader=_CountingLoader(), lock_timeout=1.5)
        assert registry.language is Language.ENGLISH
        assert registry.lock_timeout == 1.5

    def test_default_registry_is_shared(self) -> None:
        assert get_default_registry() is get_default_registry()
        assert get_default_registry().language is Language.ENGLISH
