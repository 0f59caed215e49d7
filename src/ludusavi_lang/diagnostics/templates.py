"""Diagnostic factories.

Every user-facing message text lives here so tests can assert on it and
log lines stay uniform between the parser, formatter and registry.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Static constructors returning Diagnostic records.

    Raise sites pass the result to an exception class; they never build
    message strings themselves.
    """

    _DOCS_BASE = "https://projectfluent.org/fluent/guide"

    @staticmethod
    def message_not_found(message_id: str) -> Diagnostic:
        """No message with this id in the catalog."""
        msg = f"Message '{message_id}' not found"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=msg,
            hint="Check that the message is defined in the catalog",
            help_url=f"{ErrorTemplate._DOCS_BASE}/messages.html",
        )

    @staticmethod
    def attribute_not_found(attribute: str, message_id: str) -> Diagnostic:
        """Message exists but lacks the requested attribute."""
        msg = f"Attribute '{attribute}' not found in message '{message_id}'"
        return Diagnostic(
            code=DiagnosticCode.ATTRIBUTE_NOT_FOUND,
            message=msg,
            hint=f"Check that message '{message_id}' has an attribute '.{attribute}'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/attributes.html",
        )

    @staticmethod
    def term_not_found(term_id: str) -> Diagnostic:
        """Term reference not found."""
        return Diagnostic(
            code=DiagnosticCode.TERM_NOT_FOUND,
            message=f"Term '-{term_id}' not found",
            hint="Terms must be defined in the same catalog",
            help_url=f"{ErrorTemplate._DOCS_BASE}/terms.html",
        )

    @staticmethod
    def term_attribute_not_found(attribute: str, term_id: str) -> Diagnostic:
        """Term attribute not found."""
        return Diagnostic(
            code=DiagnosticCode.TERM_ATTRIBUTE_NOT_FOUND,
            message=f"Attribute '{attribute}' not found in term '-{term_id}'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/terms.html",
        )

    @staticmethod
    def variable_not_provided(variable_name: str) -> Diagnostic:
        """Pattern uses $variable_name but the caller did not pass it."""
        msg = f"Variable '${variable_name}' not provided"
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_NOT_PROVIDED,
            message=msg,
            hint=f"Pass '{variable_name}' in the arguments dictionary",
            help_url=f"{ErrorTemplate._DOCS_BASE}/variables.html",
            severity="warning",
        )

    @staticmethod
    def message_no_value(message_id: str) -> Diagnostic:
        """Message has attributes only, no default pattern."""
        msg = f"Message '{message_id}' has no value"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NO_VALUE,
            message=msg,
            hint="Request one of the message attributes with 'id.attribute'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/attributes.html",
        )

    @staticmethod
    def cyclic_reference(resolution_path: list[str]) -> Diagnostic:
        """Reference loop; resolution_path ends with the repeated key."""
        msg = f"Circular reference detected: {' -> '.join(resolution_path)}"
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message=msg,
            hint="Break the cycle by removing one of the references",
            resolution_path=tuple(resolution_path),
        )

    @staticmethod
    def max_depth_exceeded(message_id: str, max_depth: int) -> Diagnostic:
        """Reference chain exceeded the depth limit."""
        msg = f"Maximum resolution depth ({max_depth}) exceeded while resolving '{message_id}'"
        return Diagnostic(code=DiagnosticCode.MAX_DEPTH_EXCEEDED, message=msg)

    @staticmethod
    def no_variants() -> Diagnostic:
        """Select expression without variants."""
        return Diagnostic(
            code=DiagnosticCode.NO_VARIANTS,
            message="Select expression has no variants",
            help_url=f"{ErrorTemplate._DOCS_BASE}/selectors.html",
        )

    @staticmethod
    def function_not_found(function_name: str) -> Diagnostic:
        """Unknown function in a placeable.

        Args:
            function_name: The function name as written in the catalog

        Returns:
            Diagnostic for FUNCTION_NOT_FOUND
        """
        msg = f"Unknown function: {function_name}()"
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_NOT_FOUND,
            message=msg,
            hint="Only NUMBER() is available to catalog patterns",
            help_url=f"{ErrorTemplate._DOCS_BASE}/functions.html",
        )

    @staticmethod
    def function_failed(function_name: str, error_msg: str) -> Diagnostic:
        """Function raised while evaluating its arguments."""
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_FAILED,
            message=f"Function {function_name}() failed: {error_msg}",
            help_url=f"{ErrorTemplate._DOCS_BASE}/functions.html",
        )

    @staticmethod
    def number_format_failed(value: object, error_msg: str) -> Diagnostic:
        """Babel could not render a numeric argument."""
        return Diagnostic(
            code=DiagnosticCode.NUMBER_FORMAT_FAILED,
            message=f"Number formatting failed for {value!r}: {error_msg}",
            hint="Pass a finite int, float or Decimal",
        )

    @staticmethod
    def lock_unavailable(timeout: float) -> Diagnostic:
        """Catalog lock was not acquired in time."""
        return Diagnostic(
            code=DiagnosticCode.LOCK_UNAVAILABLE,
            message=f"Catalog lock not acquired within {timeout:g}s",
        )

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Parser reached end of input mid-construct.

        Args:
            position: Character offset where EOF was reached

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected EOF at position {position}",
        )

    @staticmethod
    def parse_junk(location: str, content: str) -> Diagnostic:
        """Unparseable catalog entry.

        Args:
            location: Resource path and line of the entry
            content: Leading part of the rejected text

        Returns:
            Diagnostic for PARSE_JUNK
        """
        return Diagnostic(
            code=DiagnosticCode.PARSE_JUNK,
            message=f"Invalid catalog entry: {content!r}",
            ftl_location=location,
            hint="Check indentation, braces and the '*' default variant marker",
            help_url=f"{ErrorTemplate._DOCS_BASE}/comments.html",
        )

    @staticmethod
    def duplicate_message(message_id: str, location: str) -> Diagnostic:
        """Message defined twice in one catalog."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_MESSAGE,
            message=f"Message '{message_id}' is defined more than once",
            ftl_location=location,
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Catalog source exceeds MAX_SOURCE_SIZE."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Source size ({size:,} chars) exceeds maximum ({limit:,} chars)",
        )
