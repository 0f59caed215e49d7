"""Pytest configuration for the ludusavi-lang test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz
"""

import os
from collections.abc import Callable
from typing import TypeAlias

import pytest
from hypothesis import Phase, Verbosity, settings

from ludusavi_lang.constants import LOCK_TIMEOUT
from ludusavi_lang.enums import Language
from ludusavi_lang.runtime import CatalogRegistry, MessageCatalog, MessageResolver
from ludusavi_lang.translator import Translator

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Pick the Hypothesis profile for this run.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev"
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in marker_expr:
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzz test: run with pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================


RegistryFactory: TypeAlias = Callable[..., CatalogRegistry]


@pytest.fixture
def make_registry() -> RegistryFactory:
    """Factory for registries over an in-memory catalog.

    Usage:
        registry = make_registry("hello = Hello", lock_timeout=0.1)
    """

    def factory(source: str, *, lock_timeout: float = LOCK_TIMEOUT) -> CatalogRegistry:
        def loader(language: Language) -> MessageCatalog:
            return MessageCatalog.from_source(source, language.id)

        return CatalogRegistry(loader=loader, lock_timeout=lock_timeout)

    return factory


@pytest.fixture(scope="session")
def registry() -> CatalogRegistry:
    """Registry over the bundled English catalog, shared by the session."""
    return CatalogRegistry()


@pytest.fixture
def resolver(registry: CatalogRegistry) -> MessageResolver:
    return MessageResolver(registry)


@pytest.fixture
def translator(resolver: MessageResolver) -> Translator:
    return Translator(resolver)
