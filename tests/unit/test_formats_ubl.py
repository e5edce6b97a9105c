"""
Unit tests for the UBL 2.1 format module (Invoice and CreditNote).
"""

from datetime import date
from decimal import Decimal

import pytest
from lxml import etree


def _parsed(xml: bytes):
    from xml_invoice_parser.formats import UBLFormat

    module = UBLFormat(etree.fromstring(xml).getroottree())
    module.parse_xml()
    return module


class TestUBLSignature:

    def test_matches_invoice_and_credit_note(self, ubl_invoice_xml, ubl_credit_note_xml):
        from xml_invoice_parser.formats import UBLFormat

        assert UBLFormat.check_signature(etree.fromstring(ubl_invoice_xml).getroottree())
        assert UBLFormat.check_signature(etree.fromstring(ubl_credit_note_xml).getroottree())

    def test_rejects_other_dialects(self, cii_invoice_xml, cid_invoice_xml):
        from xml_invoice_parser.formats import UBLFormat

        assert not UBLFormat.check_signature(etree.fromstring(cii_invoice_xml))
        assert not UBLFormat.check_signature(etree.fromstring(cid_invoice_xml))

    def test_rejects_invoice_root_in_wrong_namespace(self):
        from xml_invoice_parser.formats import UBLFormat

        root = etree.fromstring(b'<Invoice xmlns="urn:example:not-ubl"/>')

        assert not UBLFormat.check_signature(root)


class TestUBLInvoice:
    """XRechnung UBL invoice with three lines."""

    def test_metadata(self, ubl_invoice_xml):
        metadata = _parsed(ubl_invoice_xml).metadata()

        assert metadata == {
            'invoice_number': 'XR-2024-0042',
            'type_code': '380',
            'issue_date': date(2024, 3, 1),
            'due_date': date(2024, 3, 31),
            'currency': 'EUR',
            'seller_name': 'Software Solutions AG',
            'seller_vat_id': 'DE123456789',
            'seller_tax_number': '201/113/40209',
            'buyer_name': 'Stadtverwaltung Musterstadt',
            'iban': 'DE02120300000000202051',
            'direct_debit': False,
            'net_total': Decimal('240.00'),
            'tax_total': Decimal('45.60'),
            'gross_total': Decimal('285.60'),
            'amount_due': Decimal('285.60'),
        }

    def test_first_line(self, ubl_invoice_xml):
        item = _parsed(ubl_invoice_xml).items()[0]

        assert item == {
            'line_id': '1',
            'description': 'Software-Lizenz Premium',
            'seller_item_id': 'LIC-01',
            'quantity': Decimal('1'),
            'unit_code': 'C62',
            'unit_price': Decimal('200.00'),
            'line_total': Decimal('200.00'),
            'tax_rate': Decimal('19'),
            'tax_category': 'S',
            'tax_scheme': 'VAT',
            'currency': 'EUR',
        }

    def test_item_name_preferred_over_description(self, ubl_invoice_xml):
        items = _parsed(ubl_invoice_xml).items()

        assert items[1]['description'] == 'Support-Stunde'
        assert items[1]['quantity'] == Decimal('0.5')
        assert items[1]['unit_code'] == 'HUR'
        assert items[1]['seller_item_id'] is None

    def test_description_used_when_name_missing(self, ubl_invoice_xml):
        items = _parsed(ubl_invoice_xml).items()

        assert items[2]['description'] == 'Versand (kostenfrei)'
        assert items[2]['tax_category'] == 'Z'
        assert items[2]['tax_rate'] == Decimal('0')
        assert items[2]['line_total'] == Decimal('0.00')

    def test_line_totals_add_up_to_net_total(self, ubl_invoice_xml):
        module = _parsed(ubl_invoice_xml)

        assert sum(item['line_total'] for item in module.items()) == module.metadata()['net_total']


class TestUBLCreditNote:
    """PEPPOL credit note: CreditNoteLine, CreditedQuantity, direct debit."""

    def test_metadata(self, ubl_credit_note_xml):
        metadata = _parsed(ubl_credit_note_xml).metadata()

        assert metadata['invoice_number'] == 'CN-7'
        assert metadata['type_code'] == '381'
        assert metadata['seller_name'] == 'Buchhandlung Lesezeichen'
        assert metadata['buyer_name'] == 'Gymnasium am Park'
        assert metadata['seller_vat_id'] is None
        assert metadata['seller_tax_number'] is None
        assert metadata['gross_total'] == Decimal('16.05')

    def test_due_date_falls_back_to_payment_means(self, ubl_credit_note_xml):
        metadata = _parsed(ubl_credit_note_xml).metadata()

        assert metadata['due_date'] == date(2024, 4, 15)

    def test_direct_debit(self, ubl_credit_note_xml):
        metadata = _parsed(ubl_credit_note_xml).metadata()

        assert metadata['direct_debit'] is True
        # Payer account of the mandate is not the creditor IBAN
        assert metadata['iban'] is None

    def test_tax_total_in_document_currency(self, ubl_credit_note_xml):
        """The EUR TaxTotal wins over the USD one listed first."""
        metadata = _parsed(ubl_credit_note_xml).metadata()

        assert metadata['tax_total'] == Decimal('1.05')

    def test_credit_note_line(self, ubl_credit_note_xml):
        items = _parsed(ubl_credit_note_xml).items()

        assert len(items) == 1
        assert items[0]['quantity'] == Decimal('3')
        assert items[0]['unit_code'] == 'C62'
        assert items[0]['unit_price'] == Decimal('5.00')
        assert items[0]['line_total'] == Decimal('15.00')
        assert items[0]['tax_rate'] == Decimal('7')
        assert items[0]['seller_item_id'] == '978-3-16-148410-0'


class TestUBLEdgeCases:

    def test_tax_total_without_currency_attribute(self, minimal_ubl_xml):
        from xml_invoice_parser import parse

        xml = minimal_ubl_xml.replace(
            '<cac:InvoiceLine>',
            '<cac:TaxTotal><cbc:TaxAmount>3.80</cbc:TaxAmount></cac:TaxTotal><cac:InvoiceLine>',
            1
        )

        assert parse(xml).metadata['tax_total'] == Decimal('3.80')

    def test_datetime_issue_date_keeps_date_part(self, minimal_ubl_xml):
        from xml_invoice_parser import parse

        xml = minimal_ubl_xml.replace('2024-01-15', '2024-01-15T10:30:00+01:00')

        assert parse(xml).metadata['issue_date'] == date(2024, 1, 15)

    @pytest.mark.parametrize("code,expected", [('49', True), ('59', True), ('58', False), ('30', False)])
    def test_payment_means_codes(self, minimal_ubl_xml, code, expected):
        from xml_invoice_parser import parse

        xml = minimal_ubl_xml.replace(
            '<cac:InvoiceLine>',
            f'<cac:PaymentMeans><cbc:PaymentMeansCode>{code}</cbc:PaymentMeansCode>'
            f'</cac:PaymentMeans><cac:InvoiceLine>',
            1
        )

        assert parse(xml).metadata['direct_debit'] is expected

    def test_direct_debit_in_second_payment_means(self, minimal_ubl_xml):
        from xml_invoice_parser import parse

        xml = minimal_ubl_xml.replace(
            '<cac:InvoiceLine>',
            '<cac:PaymentMeans><cbc:PaymentMeansCode>58</cbc:PaymentMeansCode></cac:PaymentMeans>'
            '<cac:PaymentMeans><cbc:PaymentMeansCode>59</cbc:PaymentMeansCode></cac:PaymentMeans>'
            '<cac:InvoiceLine>',
            1
        )

        assert parse(xml).metadata['direct_debit'] is True
