"""
xml-invoice-parser: universal parser for XML invoice formats with format auto-detection.

Supported dialects (EN16931 and adjacent):
- UBL 2.1 Invoice/CreditNote (XRechnung UBL, PEPPOL)
- UN/CEFACT CrossIndustryInvoice (ZUGFeRD 2.x, Factur-X, XRechnung CII)
- ZUGFeRD 1.0 CrossIndustryDocument

Hybrid PDF invoices are out of scope: extract the XML attachment first and
pass the XML payload.

Main package exports for user-facing API.
"""

from xml_invoice_parser.exceptions import (
    InvoiceParserError,
    FormatModuleDefect,
    IncompleteImplementationError,
    NotParsedError,
    ExtractionError,
    UnknownFormatModuleError,
)
from xml_invoice_parser.models import (
    ParseResult,
    ResultStatus,
    METADATA_KEYS,
    ITEM_KEYS,
)
from xml_invoice_parser.registry import FormatRegistry, get_default_registry
from xml_invoice_parser.parser import InvoiceParser, parse, parse_file

__version__ = '0.1.0'

__all__ = [
    'parse',
    'parse_file',
    'InvoiceParser',
    'ParseResult',
    'ResultStatus',
    'METADATA_KEYS',
    'ITEM_KEYS',
    'FormatRegistry',
    'get_default_registry',
    'InvoiceParserError',
    'FormatModuleDefect',
    'IncompleteImplementationError',
    'NotParsedError',
    'ExtractionError',
    'UnknownFormatModuleError',
]
