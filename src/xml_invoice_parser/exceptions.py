"""
Exceptions raised by xml-invoice-parser.

Documents that are not well-formed or that match no known dialect are NOT
exceptions: they are reported through ParseResult. The classes below cover
the remaining failures.

Exception Hierarchy:
    InvoiceParserError (base)
    ├── FormatModuleDefect            (fatal, a bug in a format module)
    │   ├── IncompleteImplementationError
    │   └── NotParsedError
    ├── ExtractionError               (a field value could not be converted)
    └── UnknownFormatModuleError      (configuration names an unknown format)
"""

from typing import Any, Dict, Iterable, Optional


class InvoiceParserError(Exception):
    """
    Base exception for all xml-invoice-parser errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class FormatModuleDefect(InvoiceParserError):
    """
    A format module violates its contract.

    These can only be fixed by editing the module. They must never be turned
    into a ParseResult: callers either crash or catch this class explicitly.
    """


class IncompleteImplementationError(FormatModuleDefect):
    """
    A format module does not declare extraction for every canonical key.

    Attributes:
        module: Name of the offending FormatModule class.
        missing_metadata_keys: Canonical metadata keys it cannot produce.
        missing_item_keys: Canonical item keys it cannot produce.
    """

    def __init__(
        self,
        module: str,
        missing_metadata_keys: Iterable[str] = (),
        missing_item_keys: Iterable[str] = ()
    ):
        self.module = module
        self.missing_metadata_keys = sorted(missing_metadata_keys)
        self.missing_item_keys = sorted(missing_item_keys)

        parts = []
        if self.missing_metadata_keys:
            parts.append(
                f"the following metadata keys appear to be missing from {module}: "
                f"{', '.join(self.missing_metadata_keys)}"
            )
        if self.missing_item_keys:
            parts.append(
                f"the following item keys appear to be missing from {module}: "
                f"{', '.join(self.missing_item_keys)}"
            )
        super().__init__("Incomplete implementation: " + "; ".join(parts))


class NotParsedError(FormatModuleDefect):
    """metadata() or items() was called before parse_xml()."""

    def __init__(self, module: str, accessor: str):
        self.module = module
        self.accessor = accessor
        super().__init__(
            f"{module}.{accessor}() called before parse_xml()"
        )


class ExtractionError(InvoiceParserError):
    """A value found in the document could not be converted to its canonical type."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        super().__init__(
            f"Could not extract '{field}': {reason}",
            details={'value': value}
        )


class UnknownFormatModuleError(InvoiceParserError, KeyError):
    """Configuration refers to a format identifier that does not exist."""

    def __init__(self, format_id: str, available: Iterable[str]):
        self.format_id = format_id
        available = sorted(available)
        super().__init__(
            f"Unknown format module: '{format_id}'",
            details={'available': available}
        )

    # KeyError.__str__ would repr() the message
    __str__ = InvoiceParserError.__str__
