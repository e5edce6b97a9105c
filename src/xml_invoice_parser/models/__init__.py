"""
Pydantic models for canonical invoice data and parse results.

This module contains the format-independent shapes every format module
must produce, and the result container handed back to callers.
"""

from xml_invoice_parser.models.invoice import (
    InvoiceMetadata,
    InvoiceItem,
    METADATA_KEYS,
    ITEM_KEYS,
)
from xml_invoice_parser.models.result import ParseResult, ResultStatus

__all__ = [
    'InvoiceMetadata',
    'InvoiceItem',
    'METADATA_KEYS',
    'ITEM_KEYS',
    'ParseResult',
    'ResultStatus',
]
