"""
Format module contract.

Every supported XML invoice dialect is a FormatModule subclass. The class
itself is a stateless descriptor (signature check, description, extraction
tables); an instance is bound to one parsed document and holds the data
extracted from it.

Lifecycle of an instance:
    module = UBLFormat(tree)   # bound, nothing extracted yet
    module.parse_xml()         # extraction + validation against canonical models
    module.metadata()          # dict keyed by METADATA_KEYS
    module.items()             # list of dicts keyed by ITEM_KEYS, document order
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Set, Tuple

from lxml import etree

from xml_invoice_parser.exceptions import NotParsedError
from xml_invoice_parser.formats.fields import XPathField
from xml_invoice_parser.models.invoice import (
    InvoiceItem,
    InvoiceMetadata,
    ITEM_KEYS,
    METADATA_KEYS,
)


logger = logging.getLogger(__name__)


class FormatModule(ABC):
    """
    Abstract base class for XML invoice dialects.

    Subclasses declare:
        format_id: Identifier used in formats.yaml
        namespaces: Prefix → URI mapping for all XPath expressions
        signature_tags: Accepted root element names in Clark notation
        signature_children: XPath expressions (relative to the root) that
            must each match at least one element
        metadata_fields: Canonical metadata key → XPathField (from the root)
        line_xpath: XPath selecting line elements (from the root)
        item_fields: Canonical item key → XPathField (from a line element)

    and implement supported().

    The keys of metadata_fields and item_fields are the module's declared
    capability. The registry refuses modules whose capability does not
    cover the canonical key sets.
    """

    format_id: ClassVar[str] = ''
    namespaces: ClassVar[Dict[str, str]] = {}
    signature_tags: ClassVar[Tuple[str, ...]] = ()
    signature_children: ClassVar[Tuple[str, ...]] = ()
    metadata_fields: ClassVar[Dict[str, XPathField]] = {}
    line_xpath: ClassVar[str] = ''
    item_fields: ClassVar[Dict[str, XPathField]] = {}

    def __init__(self, tree: etree._ElementTree):
        self._tree = tree
        self._metadata: Optional[InvoiceMetadata] = None
        self._items: Optional[List[InvoiceItem]] = None

    # === Stateless descriptor ===

    @classmethod
    def check_signature(cls, tree: Any) -> bool:
        """
        Return True if tree looks like a document of this dialect.

        Checks the root element name, then the required child elements.
        Never raises: input that cannot be inspected counts as no match.
        """
        try:
            root = root_element(tree)
            if root is None or root.tag not in cls.signature_tags:
                return False
            return all(
                root.xpath(path, namespaces=cls.namespaces)
                for path in cls.signature_children
            )
        except (AttributeError, TypeError, ValueError, etree.XPathError) as e:
            logger.debug(f"{cls.__name__} signature check failed: {e}")
            return False

    @classmethod
    @abstractmethod
    def supported(cls) -> str:
        """One-line human-readable description of the dialect."""

    @classmethod
    def metadata_keys(cls) -> Set[str]:
        """Canonical metadata keys this module must populate."""
        return set(METADATA_KEYS)

    @classmethod
    def item_keys(cls) -> Set[str]:
        """Canonical item keys this module must populate."""
        return set(ITEM_KEYS)

    @classmethod
    def declared_metadata_capability(cls) -> Set[str]:
        """Metadata keys this module has extraction rules for."""
        return set(cls.metadata_fields)

    @classmethod
    def declared_item_capability(cls) -> Set[str]:
        """Item keys this module has extraction rules for."""
        return set(cls.item_fields)

    # === Per-document state ===

    def parse_xml(self) -> None:
        """
        Extract metadata and items from the bound tree.

        Safe to call more than once: the tree is never modified, so every
        call yields the same values and replaces the previous state.
        Unreadable values come out as None.

        Raises:
            pydantic.ValidationError: If the extracted keys do not match the
                canonical key sets
        """
        root = root_element(self._tree)

        metadata = InvoiceMetadata(**self._extract(root, self.metadata_fields))

        items = []
        for line in root.xpath(self.line_xpath, namespaces=self.namespaces):
            values = self._extract(line, self.item_fields)
            # Lines without their own currency inherit the document currency
            if 'currency' in values and values['currency'] is None:
                values['currency'] = metadata.currency
            items.append(InvoiceItem(**values))

        self._metadata = metadata
        self._items = items
        logger.debug(
            f"{type(self).__name__} extracted invoice "
            f"{metadata.invoice_number} with {len(items)} items"
        )

    def _extract(self, node: etree._Element, fields: Dict[str, XPathField]) -> Dict[str, Any]:
        return {
            key: field.extract(node, self.namespaces, key)
            for key, field in fields.items()
        }

    def metadata(self) -> Dict[str, Any]:
        """
        Return the canonical metadata of the parsed document.

        Raises:
            NotParsedError: If parse_xml() has not been called
        """
        if self._metadata is None:
            raise NotParsedError(type(self).__name__, 'metadata')
        return self._metadata.model_dump()

    def items(self) -> List[Dict[str, Any]]:
        """
        Return the canonical line items in document order.

        Raises:
            NotParsedError: If parse_xml() has not been called
        """
        if self._items is None:
            raise NotParsedError(type(self).__name__, 'items')
        return [item.model_dump() for item in self._items]

    def __repr__(self) -> str:
        state = 'parsed' if self._metadata is not None else 'unparsed'
        return f"{type(self).__name__}({state})"


def root_element(tree: Any) -> Optional[etree._Element]:
    """Return the root element of an ElementTree, or the element itself."""
    if isinstance(tree, etree._ElementTree):
        return tree.getroot()
    if isinstance(tree, etree._Element):
        return tree
    raise TypeError(f"Expected an lxml tree or element, got {type(tree).__name__}")
