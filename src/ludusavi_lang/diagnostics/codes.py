"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Reference errors (missing messages, terms, variables)
        2000-2999: Resolution errors (runtime evaluation failures)
        3000-3999: Syntax errors (catalog parse failures)
    """

    # Reference errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    ATTRIBUTE_NOT_FOUND = 1002
    TERM_NOT_FOUND = 1003
    TERM_ATTRIBUTE_NOT_FOUND = 1004
    VARIABLE_NOT_PROVIDED = 1005
    MESSAGE_NO_VALUE = 1006

    # Resolution errors (2000-2999)
    CYCLIC_REFERENCE = 2001
    NO_VARIANTS = 2002
    FUNCTION_NOT_FOUND = 2003
    FUNCTION_FAILED = 2004
    NUMBER_FORMAT_FAILED = 2005
    MAX_DEPTH_EXCEEDED = 2010
    LOCK_UNAVAILABLE = 2020

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    PARSE_JUNK = 3004
    DUPLICATE_MESSAGE = 3006
    SOURCE_TOO_LARGE = 3007


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        ftl_location: Catalog location (resource path and line) when known
        severity: Error severity level
        resolution_path: Resolution stack at time of error (nested references)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    help_url: str | None = None
    ftl_location: str | None = None
    severity: Literal["error", "warning"] = "error"
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MESSAGE_NOT_FOUND]: Message 'hello' not found
              = help: Check that the message is defined in the catalog
              = note: see https://projectfluent.org/fluent/guide/messages.html

        Returns:
            Formatted error message
        """
        # repr()[1:-1] escapes control characters (log injection prevention)
        lines = [f"{self.severity}[{self.code.name}]: {repr(self.message)[1:-1]}"]
        if self.ftl_location:
            lines.append(f"  --> {self.ftl_location}")
        if self.resolution_path:
            lines.append(f"  = path: {' -> '.join(self.resolution_path)}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        if self.help_url:
            lines.append(f"  = note: see {self.help_url}")
        return "\n".join(lines)
