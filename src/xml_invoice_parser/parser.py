"""
Dispatcher: XML text in, ParseResult out.

Flow of InvoiceParser.parse():
1. Parse the raw XML with lxml (not well-formed → XML_PARSE_FAILED)
2. Ask the registry for the first module whose signature matches
   (none → UNKNOWN_FORMAT)
3. Bind a fresh module instance to the tree and extract
4. Return OK with canonical metadata and items

Steps 1 and 2 are expected outcomes and are reported in the result. A value
that cannot be converted in step 3 is logged and stored as None. Errors
raised during step 3 are module defects and propagate.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from lxml import etree

from xml_invoice_parser.config import AppConfig, get_app_config
from xml_invoice_parser.messages import render_message
from xml_invoice_parser.models.result import ParseResult, ResultStatus
from xml_invoice_parser.registry import FormatRegistry, get_default_registry


logger = logging.getLogger(__name__)

RawXML = Union[str, bytes]


class InvoiceParser:
    """
    Parse XML invoices of any registered dialect into canonical form.

    The parser holds no per-document state and may be shared between
    threads: every call builds its own tree and module instance.

    Args:
        registry: Format registry to detect with (default: formats.yaml order)
        config: Application config (default: environment)

    Example:
        >>> parser = InvoiceParser()
        >>> result = parser.parse(xml_text)
        >>> result.status
        <ResultStatus.OK: 0>
        >>> result.metadata['currency']
        'EUR'
        >>> [item['quantity'] for item in result.items]
        [Decimal('2')]
    """

    def __init__(
        self,
        registry: Optional[FormatRegistry] = None,
        config: Optional[AppConfig] = None
    ):
        self._registry = registry if registry is not None else get_default_registry()
        self._config = config if config is not None else get_app_config()

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    def parse(self, raw_xml: RawXML) -> ParseResult:
        """
        Parse one XML invoice.

        Args:
            raw_xml: XML document as str or bytes. Bytes are decoded as the
                XML declaration says; str is treated as already decoded.

        Returns:
            ParseResult with status OK, XML_PARSE_FAILED or UNKNOWN_FORMAT

        Raises:
            FormatModuleDefect: If the matched module violates its contract
        """
        try:
            tree = self._load_tree(raw_xml)
        except (etree.XMLSyntaxError, ValueError, TypeError) as e:
            logger.warning(f"XML parsing failed: {e}")
            return ParseResult.failure(
                ResultStatus.XML_PARSE_FAILED,
                render_message('xml_parse_failed', _display_input(raw_xml))
            )

        module_cls = self._registry.detect(tree)
        if module_cls is None:
            root_tag = tree.getroot().tag
            logger.info(f"Unknown XML invoice type, root element: {root_tag}")
            return ParseResult.failure(
                ResultStatus.UNKNOWN_FORMAT,
                render_message('unknown_format', ",\n".join(self._registry.supported()))
            )

        module = module_cls(tree)
        module.parse_xml()

        metadata = module.metadata()
        items = module.items()

        logger.debug(
            f"Parsed {module_cls.format_id} invoice "
            f"{metadata.get('invoice_number')} ({len(items)} items)"
        )
        return ParseResult.success(module_cls.format_id, metadata, items)

    def _load_tree(self, raw_xml: RawXML) -> etree._ElementTree:
        """
        Parse raw XML into an lxml tree without entity expansion or network access.

        lxml rejects str input carrying an encoding declaration, so str is
        encoded to UTF-8 and the parser told to ignore the declaration.
        """
        options = dict(
            resolve_entities=False,
            no_network=True,
            huge_tree=self._config.huge_tree,
        )

        if isinstance(raw_xml, str):
            data = raw_xml.encode('utf-8')
            parser = etree.XMLParser(encoding='utf-8', **options)
        elif isinstance(raw_xml, (bytes, bytearray)):
            data = bytes(raw_xml)
            parser = etree.XMLParser(**options)
        else:
            raise TypeError(f"Expected XML as str or bytes, got {type(raw_xml).__name__}")

        root = etree.fromstring(data, parser)
        if root is None:
            raise ValueError("Document is empty")
        return root.getroottree()


def _display_input(raw_xml: object) -> str:
    """Render the offending input for the diagnostic message."""
    if isinstance(raw_xml, (bytes, bytearray)):
        return bytes(raw_xml).decode('utf-8', errors='replace')
    if isinstance(raw_xml, str):
        return raw_xml
    return repr(raw_xml)


_default_parser: Optional[InvoiceParser] = None


def _get_default_parser() -> InvoiceParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = InvoiceParser()
    return _default_parser


def parse(raw_xml: RawXML) -> ParseResult:
    """
    Parse one XML invoice with the default registry.

    Example:
        >>> from xml_invoice_parser import parse
        >>> result = parse('<unrelated-root xmlns="urn:example"/>')
        >>> result.status.name
        'UNKNOWN_FORMAT'
    """
    return _get_default_parser().parse(raw_xml)


def parse_file(path: Union[str, Path], parser: Optional[InvoiceParser] = None) -> ParseResult:
    """
    Read an XML file from disk and parse it.

    The file is read as bytes so the XML declaration decides the encoding.
    PDF containers (ZUGFeRD/Factur-X) must have their XML attachment
    extracted beforehand.

    Raises:
        OSError: If the file cannot be read
    """
    data = Path(path).read_bytes()
    return (parser or _get_default_parser()).parse(data)
