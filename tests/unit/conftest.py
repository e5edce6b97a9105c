"""
Pytest configuration for unit tests.

Provides sample invoice documents and helpers that apply to all unit tests.
Sample documents live in tests/fixtures/.
"""

from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).resolve().parent.parent / 'fixtures'


# Smallest UBL invoice that yields one line item
MINIMAL_UBL_INVOICE = """<?xml version="1.0" encoding="UTF-8"?>
<Invoice xmlns="urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
         xmlns:cac="urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
         xmlns:cbc="urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2">
    <cbc:ID>INV-1</cbc:ID>
    <cbc:IssueDate>2024-01-15</cbc:IssueDate>
    <cbc:DocumentCurrencyCode>EUR</cbc:DocumentCurrencyCode>
    <cac:InvoiceLine>
        <cbc:ID>1</cbc:ID>
        <cbc:InvoicedQuantity unitCode="C62">2</cbc:InvoicedQuantity>
        <cbc:LineExtensionAmount currencyID="EUR">20.00</cbc:LineExtensionAmount>
        <cac:Item>
            <cbc:Name>Widget</cbc:Name>
        </cac:Item>
        <cac:Price>
            <cbc:PriceAmount currencyID="EUR">10.00</cbc:PriceAmount>
        </cac:Price>
    </cac:InvoiceLine>
</Invoice>
"""


def load_fixture(name: str) -> bytes:
    """Read a sample document from tests/fixtures as bytes."""
    return (FIXTURES_DIR / name).read_bytes()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def minimal_ubl_xml() -> str:
    return MINIMAL_UBL_INVOICE


@pytest.fixture
def ubl_invoice_xml() -> bytes:
    """XRechnung UBL invoice: three lines, VAT id and tax number."""
    return load_fixture('ubl_invoice.xml')


@pytest.fixture
def ubl_credit_note_xml() -> bytes:
    """PEPPOL credit note paid by direct debit, tax total in two currencies."""
    return load_fixture('ubl_credit_note.xml')


@pytest.fixture
def cii_invoice_xml() -> bytes:
    """Factur-X / ZUGFeRD 2.x EN16931 invoice with two lines."""
    return load_fixture('cii_invoice.xml')


@pytest.fixture
def cid_invoice_xml() -> bytes:
    """ZUGFeRD 1.0 comfort invoice paid by direct debit."""
    return load_fixture('cid_invoice.xml')


@pytest.fixture
def fresh_app_config(monkeypatch):
    """Drop the cached AppConfig so environment changes made by the test apply."""
    import xml_invoice_parser.config as config_module

    monkeypatch.setattr(config_module, '_app_config', None)
