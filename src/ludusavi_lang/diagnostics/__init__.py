"""Diagnostic system for catalog and formatting errors.

Provides structured error diagnostics with codes, hints, and help URLs.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CatalogSyntaxError,
    CyclicReferenceWarning,
    FormatWarning,
    LangError,
    ReferenceWarning,
    ResolutionWarning,
)
from .templates import ErrorTemplate

__all__ = [
    "CatalogSyntaxError",
    "CyclicReferenceWarning",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FormatWarning",
    "LangError",
    "ReferenceWarning",
    "ResolutionWarning",
]
