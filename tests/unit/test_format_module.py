"""
Unit tests for the FormatModule lifecycle shared by all dialects.
"""

import pytest
from lxml import etree


def _ubl_tree(xml: str):
    return etree.fromstring(xml.encode('utf-8')).getroottree()


class TestModuleLifecycle:

    def test_metadata_before_parse_is_a_defect(self, minimal_ubl_xml):
        from xml_invoice_parser.exceptions import FormatModuleDefect, NotParsedError
        from xml_invoice_parser.formats import UBLFormat

        module = UBLFormat(_ubl_tree(minimal_ubl_xml))

        with pytest.raises(NotParsedError) as exc_info:
            module.metadata()

        assert isinstance(exc_info.value, FormatModuleDefect)
        assert str(exc_info.value) == "UBLFormat.metadata() called before parse_xml()"

    def test_items_before_parse_is_a_defect(self, minimal_ubl_xml):
        from xml_invoice_parser.exceptions import NotParsedError
        from xml_invoice_parser.formats import UBLFormat

        module = UBLFormat(_ubl_tree(minimal_ubl_xml))

        with pytest.raises(NotParsedError, match=r"items\(\)"):
            module.items()

    def test_parse_xml_twice_gives_same_data(self, minimal_ubl_xml):
        from xml_invoice_parser.formats import UBLFormat

        module = UBLFormat(_ubl_tree(minimal_ubl_xml))
        module.parse_xml()
        first = (module.metadata(), module.items())
        module.parse_xml()

        assert (module.metadata(), module.items()) == first

    def test_accessors_return_copies(self, minimal_ubl_xml):
        from xml_invoice_parser.formats import UBLFormat

        module = UBLFormat(_ubl_tree(minimal_ubl_xml))
        module.parse_xml()
        module.metadata()['currency'] = 'USD'
        module.items().clear()

        assert module.metadata()['currency'] == 'EUR'
        assert len(module.items()) == 1

    def test_repr_shows_state(self, minimal_ubl_xml):
        from xml_invoice_parser.formats import UBLFormat

        module = UBLFormat(_ubl_tree(minimal_ubl_xml))
        assert repr(module) == "UBLFormat(unparsed)"

        module.parse_xml()
        assert repr(module) == "UBLFormat(parsed)"

    def test_wrong_value_type_is_rejected_by_canonical_model(self, minimal_ubl_xml):
        """A module mapping text onto a date key fails validation instead of leaking."""
        from pydantic import ValidationError
        from xml_invoice_parser.formats import UBLFormat, XPathField

        class BrokenUBLFormat(UBLFormat):
            metadata_fields = {
                **UBLFormat.metadata_fields,
                'issue_date': XPathField('cbc:ID'),
            }

        module = BrokenUBLFormat(_ubl_tree(minimal_ubl_xml))

        with pytest.raises(ValidationError):
            module.parse_xml()


class TestModuleDescriptor:

    def test_declared_capability_covers_canonical_keys(self):
        from xml_invoice_parser.formats import FORMAT_MODULES
        from xml_invoice_parser.models import ITEM_KEYS, METADATA_KEYS

        for module in FORMAT_MODULES.values():
            assert module.declared_metadata_capability() == METADATA_KEYS
            assert module.declared_item_capability() == ITEM_KEYS
            assert module.metadata_keys() == set(METADATA_KEYS)
            assert module.item_keys() == set(ITEM_KEYS)

    def test_format_ids_are_unique_and_descriptive(self):
        from xml_invoice_parser.formats import FORMAT_MODULES

        assert set(FORMAT_MODULES) == {
            'ubl', 'cross_industry_invoice', 'cross_industry_document'
        }
        for format_id, module in FORMAT_MODULES.items():
            assert module.format_id == format_id
            assert module.supported()

    def test_check_signature_never_raises(self):
        from xml_invoice_parser.formats import FORMAT_MODULES

        for module in FORMAT_MODULES.values():
            assert module.check_signature(None) is False
            assert module.check_signature('<Invoice/>') is False
            assert module.check_signature(42) is False

    def test_root_element_rejects_non_lxml_input(self):
        from xml_invoice_parser.formats.base import root_element

        with pytest.raises(TypeError, match="Expected an lxml tree or element"):
            root_element('<Invoice/>')

    def test_root_element_accepts_tree_and_element(self):
        from xml_invoice_parser.formats.base import root_element

        root = etree.fromstring(b'<root/>')

        assert root_element(root) is root
        assert root_element(root.getroottree()) is root
