"""Enumerations for ludusavi-lang type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class CommentType(StrEnum):
    """Type of FTL comment.

    StrEnum provides automatic string conversion: str(CommentType.COMMENT) == "comment"
    """

    COMMENT = "comment"
    """Standalone comment: # This is a comment"""

    GROUP = "group"
    """Group comment: ## Group Title"""

    RESOURCE = "resource"
    """Resource comment: ### Resource Description"""


class Language(StrEnum):
    """Languages with a bundled catalog.

    The member value is the BCP-47 locale id and also the stem of the
    bundled resource file (``resources/<id>.ftl``).
    """

    ENGLISH = "en-US"

    @property
    def id(self) -> str:
        """Locale identifier for this language."""
        return self.value


class MissingKind(StrEnum):
    """Why a lookup produced a diagnostic sentinel instead of text."""

    CANNOT_LOCK = "cannot_lock"
    """Catalog lock could not be acquired in time"""

    NO_MESSAGE = "no_message"
    """Message id is not in the catalog"""

    NO_ATTRIBUTE = "no_attribute"
    """Message exists but lacks the requested attribute"""

    NO_VALUE = "no_value"
    """Message exists but has only attributes, no default pattern"""


__all__ = [
    "CommentType",
    "Language",
    "MissingKind",
]
