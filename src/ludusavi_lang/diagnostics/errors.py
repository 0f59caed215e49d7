"""Exception hierarchy with structured diagnostics.

Two families:
    CatalogSyntaxError - raised; the catalog cannot be built (fatal)
    FormatWarning - collected; a pattern was formatted with degraded output

All exceptions store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CatalogSyntaxError",
    "CyclicReferenceWarning",
    "FormatWarning",
    "LangError",
    "ReferenceWarning",
    "ResolutionWarning",
]


class LangError(Exception):
    """Base exception for all ludusavi-lang errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LangError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class CatalogSyntaxError(LangError):
    """The embedded catalog could not be parsed.

    The one unrecoverable condition: without its catalog the process
    cannot render any localized text.
    """


class FormatWarning(LangError):
    """Soft failure while formatting a pattern.

    Never propagated to callers of the resolver. Collected in the
    (text, warnings) tuple returned by PatternFormatter.format().
    """


class ReferenceWarning(FormatWarning):
    """Unknown variable, message, term or attribute reference.

    Fallback: the reference is rendered in braces, e.g. {$path}.
    """


class CyclicReferenceWarning(ReferenceWarning):
    """Cyclic reference detected (message references itself).

    Example:
        hello = { hello }  <- Infinite loop!
    """


class ResolutionWarning(FormatWarning):
    """Runtime failure while evaluating an expression.

    Examples:
    - Unknown function
    - Function raised on its arguments
    - Reference chain deeper than MAX_DEPTH
    """
