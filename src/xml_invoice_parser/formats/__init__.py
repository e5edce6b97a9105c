"""
XML invoice format modules.

One FormatModule subclass per supported dialect. FORMAT_MODULES is the
closed set of known modules, keyed by the identifiers used in formats.yaml.
Adding a dialect means implementing FormatModule, adding it here, and
listing its identifier in formats.yaml.
"""

from typing import Dict, Type

from .base import FormatModule
from .fields import XPathField
from .ubl import UBLFormat
from .cross_industry_invoice import CrossIndustryInvoiceFormat
from .cross_industry_document import CrossIndustryDocumentFormat


FORMAT_MODULES: Dict[str, Type[FormatModule]] = {
    module.format_id: module
    for module in (
        CrossIndustryDocumentFormat,
        CrossIndustryInvoiceFormat,
        UBLFormat,
    )
}

__all__ = [
    'FormatModule',
    'XPathField',
    'UBLFormat',
    'CrossIndustryInvoiceFormat',
    'CrossIndustryDocumentFormat',
    'FORMAT_MODULES',
]
