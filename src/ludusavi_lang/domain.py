"""Domain shapes consumed by the translator.

These values are produced by the backup engine, configuration loader and
manifest code. The translator only reads them: a rendered path, status
counters, decision and store enums, and the closed set of error kinds.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeAlias
from enum import Enum

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Values
    "StrictPath",
    "OperationStatus",
    "OperationStepDecision",
    "Store",
    "SortKey",
    "RootsConfig",
    # Error kinds
    "ConfigInvalid",
    "ManifestInvalid",
    "ManifestCannotBeUpdated",
    "CliBackupTargetExists",
    "CliUnrecognizedGames",
    "CliUnableToRequestConfirmation",
    "SomeEntriesFailed",
    "CannotPrepareBackupTarget",
    "RestorationSourceInvalid",
    "RegistryIssue",
    "UnableToBrowseFileSystem",
    "UnableToOpenDir",
    "UnableToOpenUrl",
    "ErrorKind",
]

# ============================================================================
# VALUES
# ============================================================================


@dataclass(frozen=True, slots=True)
class StrictPath:
    """Filesystem path as configured by the user.

    Example:
        >>> StrictPath("~/ludusavi-backup").render()
        '~/ludusavi-backup'
    """

    raw: str

    def render(self) -> str:
        """Canonical textual form shown to the user."""
        return self.raw


@dataclass(frozen=True, slots=True)
class OperationStatus:
    """Counters for a backup or restore run."""

    total_games: int = 0
    total_bytes: int = 0
    processed_games: int = 0
    processed_bytes: int = 0

    def processed_all_games(self) -> bool:
        return self.processed_games == self.total_games

    def processed_all_bytes(self) -> bool:
        return self.processed_bytes == self.total_bytes

    def processed_all(self) -> bool:
        return self.processed_all_games() and self.processed_all_bytes()


class OperationStepDecision(Enum):
    """What the engine did with one game or file."""

    PROCESSED = "processed"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


class Store(Enum):
    """Game store a root belongs to."""

    EPIC = "epic"
    GOG = "gog"
    GOG_GALAXY = "gog-galaxy"
    MICROSOFT = "microsoft"
    ORIGIN = "origin"
    PRIME = "prime"
    STEAM = "steam"
    UPLAY = "uplay"
    OTHER_HOME = "other-home"
    OTHER_WINE = "other-wine"
    OTHER = "other"


class SortKey(Enum):
    """Column the game list is sorted by."""

    NAME = "name"
    SIZE = "size"


@dataclass(frozen=True, slots=True)
class RootsConfig:
    """A configured root directory and its store."""

    path: StrictPath
    store: Store


# ============================================================================
# ERROR KINDS
# ============================================================================


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    why: str


@dataclass(frozen=True, slots=True)
class ManifestInvalid:
    why: str


@dataclass(frozen=True, slots=True)
class ManifestCannotBeUpdated:
    pass


@dataclass(frozen=True, slots=True)
class CliBackupTargetExists:
    path: StrictPath


@dataclass(frozen=True, slots=True)
class CliUnrecognizedGames:
    games: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CliUnableToRequestConfirmation:
    pass


@dataclass(frozen=True, slots=True)
class SomeEntriesFailed:
    pass


@dataclass(frozen=True, slots=True)
class CannotPrepareBackupTarget:
    path: StrictPath


@dataclass(frozen=True, slots=True)
class RestorationSourceInvalid:
    path: StrictPath


@dataclass(frozen=True, slots=True)
class RegistryIssue:
    pass


@dataclass(frozen=True, slots=True)
class UnableToBrowseFileSystem:
    pass


@dataclass(frozen=True, slots=True)
class UnableToOpenDir:
    path: StrictPath


@dataclass(frozen=True, slots=True)
class UnableToOpenUrl:
    url: str


ErrorKind: TypeAlias = (
    ConfigInvalid
    | ManifestInvalid
    | ManifestCannotBeUpdated
    | CliBackupTargetExists
    | CliUnrecognizedGames
    | CliUnableToRequestConfirmation
    | SomeEntriesFailed
    | CannotPrepareBackupTarget
    | RestorationSourceInvalid
    | RegistryIssue
    | UnableToBrowseFileSystem
    | UnableToOpenDir
    | UnableToOpenUrl
)
"""Closed set of errors the translator can render."""
