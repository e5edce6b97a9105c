"""
Field lookup and value conversion helpers for format modules.

A format module describes each canonical key as an XPathField: one or more
XPath expressions (tried in order, first non-empty result wins) plus a
converter that turns the matched node into the canonical value type.

Converters raise ExtractionError for values they cannot read. XPathField
logs those as warnings and stores None, so a document that is otherwise
well formed still parses.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Sequence

from lxml import etree

from xml_invoice_parser.exceptions import ExtractionError

logger = logging.getLogger(__name__)


# UNTDID 4461 payment means codes that denote a direct debit
DIRECT_DEBIT_CODES = frozenset({'49', '59'})

# XPath predicate selecting a payment means code element holding one of the above
DIRECT_DEBIT_PREDICATE = '[' + ' or '.join(
    f"normalize-space(.)='{code}'" for code in sorted(DIRECT_DEBIT_CODES)
) + ']'

Converter = Callable[[str, Any], Any]


def node_text(node: Any) -> Optional[str]:
    """
    Return stripped text of an XPath result, or None if empty.

    Handles both element results (all descendant text) and string results
    from attribute or text() expressions.
    """
    if node is None:
        return None
    if isinstance(node, etree._Element):
        text = ''.join(node.itertext()).strip()
    else:
        text = str(node).strip()
    return text or None


def first_match(
    node: etree._Element,
    paths: Sequence[str],
    namespaces: Dict[str, str]
) -> Any:
    """
    Evaluate paths in order and return the first result with non-empty text.

    Args:
        node: Context element (document root or a line element)
        paths: XPath expressions relative to node
        namespaces: Prefix → namespace URI mapping for the expressions

    Returns:
        The matching element or string result, or None if nothing matched
    """
    for path in paths:
        results = node.xpath(path, namespaces=namespaces)
        if not isinstance(results, list):
            results = [results]
        for result in results:
            if node_text(result) is not None:
                return result
    return None


# === Converters: (key, xpath result) -> canonical value ===

def to_text(key: str, node: Any) -> Optional[str]:
    return node_text(node)


def to_decimal(key: str, node: Any) -> Optional[Decimal]:
    text = node_text(node)
    if text is None:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise ExtractionError(key, text, "not a decimal number") from e
    if not value.is_finite():
        raise ExtractionError(key, text, "not a finite number")
    return value


def to_iso_date(key: str, node: Any) -> Optional[date]:
    """Parse an ISO 8601 date (YYYY-MM-DD), ignoring any time or zone suffix."""
    text = node_text(node)
    if text is None:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError as e:
        raise ExtractionError(key, text, "not an ISO 8601 date") from e


# UN/CEFACT date/time format qualifiers (UNTDID 2379)
_CEFACT_DATE_FORMATS = {
    '102': '%Y%m%d',
    '203': '%Y%m%d%H%M',
    '204': '%Y%m%d%H%M%S',
    '610': '%Y%m',
}


def to_cefact_date(key: str, node: Any) -> Optional[date]:
    """
    Parse a UN/CEFACT udt:DateTimeString.

    The element's format attribute selects the layout:

    - 102: YYYYMMDD
    - 203: YYYYMMDDHHMM (time dropped)
    - 204: YYYYMMDDHHMMSS (time dropped)
    - 610: YYYYMM, mapped to the first of the month
    - 616: YYYYWW, ISO week mapped to its Monday

    Without a known format attribute an eight digit value is read as 102,
    anything else as ISO.
    """
    text = node_text(node)
    if text is None:
        return None

    qualifier = node.get('format') if isinstance(node, etree._Element) else None
    if qualifier is None and len(text) == 8 and text.isdigit():
        qualifier = '102'

    pattern = _CEFACT_DATE_FORMATS.get(qualifier)
    try:
        if qualifier == '616':
            if len(text) != 6 or not text.isdigit():
                raise ValueError(text)
            return datetime.strptime(text + '1', '%G%V%u').date()
        if pattern is not None:
            return datetime.strptime(text, pattern).date()
        return date.fromisoformat(text[:10])
    except ValueError as e:
        raise ExtractionError(key, text, f"not a date in format '{qualifier}'") from e


def to_direct_debit(key: str, node: Any) -> bool:
    """True if the payment means code denotes a direct debit."""
    return node_text(node) in DIRECT_DEBIT_CODES


class XPathField:
    """
    Declarative description of how to extract one canonical key.

    Args:
        *paths: XPath expressions tried in order
        convert: Converter applied to the first non-empty result

    Example:
        >>> due = XPathField('cbc:DueDate', 'cac:PaymentMeans/cbc:PaymentDueDate',
        ...                  convert=to_iso_date)
        >>> due.extract(root, UBL_NAMESPACES, 'due_date')
        datetime.date(2024, 3, 31)
    """

    def __init__(self, *paths: str, convert: Converter = to_text):
        if not paths:
            raise ValueError("XPathField needs at least one XPath expression")
        self.paths = paths
        self.convert = convert

    def extract(self, node: etree._Element, namespaces: Dict[str, str], key: str) -> Any:
        """Convert the first match, or return None if its value is unreadable."""
        try:
            return self.convert(key, first_match(node, self.paths, namespaces))
        except ExtractionError as e:
            logger.warning(f"Storing None for unreadable value: {e}")
            return None

    def __repr__(self) -> str:
        return f"XPathField({', '.join(repr(p) for p in self.paths)}, convert={self.convert.__name__})"
