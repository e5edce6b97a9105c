"""
OASIS Universal Business Language 2.1 invoices and credit notes.

Used by XRechnung (UBL syntax) and PEPPOL BIS Billing 3.0. Both the
Invoice-2 and CreditNote-2 document types are recognised; the two only
differ in a few element names (InvoiceLine/CreditNoteLine,
InvoicedQuantity/CreditedQuantity, InvoiceTypeCode/CreditNoteTypeCode).

Structure (abridged):
    <Invoice>
        <cbc:ID/> <cbc:IssueDate/> <cbc:DueDate/> <cbc:DocumentCurrencyCode/>
        <cac:AccountingSupplierParty>/<cac:Party>
        <cac:AccountingCustomerParty>/<cac:Party>
        <cac:PaymentMeans/>
        <cac:TaxTotal/>
        <cac:LegalMonetaryTotal/>
        <cac:InvoiceLine/>*
    </Invoice>
"""

from xml_invoice_parser.formats.base import FormatModule
from xml_invoice_parser.formats.fields import (
    DIRECT_DEBIT_PREDICATE,
    XPathField,
    to_decimal,
    to_direct_debit,
    to_iso_date,
)


UBL_INVOICE_NS = 'urn:oasis:names:specification:ubl:schema:xsd:Invoice-2'
UBL_CREDIT_NOTE_NS = 'urn:oasis:names:specification:ubl:schema:xsd:CreditNote-2'

NAMESPACES = {
    'cac': 'urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2',
    'cbc': 'urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2',
}

_SELLER = 'cac:AccountingSupplierParty/cac:Party'
_BUYER = 'cac:AccountingCustomerParty/cac:Party'
_TOTALS = 'cac:LegalMonetaryTotal'
_TAX_CATEGORY = 'cac:Item/cac:ClassifiedTaxCategory'


class UBLFormat(FormatModule):
    """UBL 2.1 Invoice / CreditNote (XRechnung UBL, PEPPOL)."""

    format_id = 'ubl'
    namespaces = NAMESPACES
    signature_tags = (
        f'{{{UBL_INVOICE_NS}}}Invoice',
        f'{{{UBL_CREDIT_NOTE_NS}}}CreditNote',
    )

    metadata_fields = {
        'invoice_number': XPathField('cbc:ID'),
        'type_code': XPathField('cbc:InvoiceTypeCode', 'cbc:CreditNoteTypeCode'),
        'issue_date': XPathField('cbc:IssueDate', convert=to_iso_date),
        'due_date': XPathField(
            'cbc:DueDate',
            'cac:PaymentMeans/cbc:PaymentDueDate',
            convert=to_iso_date
        ),
        'currency': XPathField('cbc:DocumentCurrencyCode'),
        'seller_name': XPathField(
            f'{_SELLER}/cac:PartyName/cbc:Name',
            f'{_SELLER}/cac:PartyLegalEntity/cbc:RegistrationName'
        ),
        'seller_vat_id': XPathField(
            f"{_SELLER}/cac:PartyTaxScheme[cac:TaxScheme/cbc:ID='VAT']/cbc:CompanyID"
        ),
        'seller_tax_number': XPathField(
            f"{_SELLER}/cac:PartyTaxScheme[not(cac:TaxScheme/cbc:ID='VAT')]/cbc:CompanyID"
        ),
        'buyer_name': XPathField(
            f'{_BUYER}/cac:PartyName/cbc:Name',
            f'{_BUYER}/cac:PartyLegalEntity/cbc:RegistrationName'
        ),
        'iban': XPathField('cac:PaymentMeans/cac:PayeeFinancialAccount/cbc:ID'),
        'direct_debit': XPathField(
            f'cac:PaymentMeans/cbc:PaymentMeansCode{DIRECT_DEBIT_PREDICATE}',
            convert=to_direct_debit
        ),
        'net_total': XPathField(f'{_TOTALS}/cbc:TaxExclusiveAmount', convert=to_decimal),
        # A second TaxTotal may be given in the accounting currency
        'tax_total': XPathField(
            'cac:TaxTotal/cbc:TaxAmount[@currencyID=/*/cbc:DocumentCurrencyCode]',
            'cac:TaxTotal/cbc:TaxAmount',
            convert=to_decimal
        ),
        'gross_total': XPathField(f'{_TOTALS}/cbc:TaxInclusiveAmount', convert=to_decimal),
        'amount_due': XPathField(f'{_TOTALS}/cbc:PayableAmount', convert=to_decimal),
    }

    line_xpath = 'cac:InvoiceLine | cac:CreditNoteLine'

    item_fields = {
        'line_id': XPathField('cbc:ID'),
        'description': XPathField('cac:Item/cbc:Name', 'cac:Item/cbc:Description'),
        'seller_item_id': XPathField('cac:Item/cac:SellersItemIdentification/cbc:ID'),
        'quantity': XPathField(
            'cbc:InvoicedQuantity',
            'cbc:CreditedQuantity',
            convert=to_decimal
        ),
        'unit_code': XPathField(
            'cbc:InvoicedQuantity/@unitCode',
            'cbc:CreditedQuantity/@unitCode'
        ),
        'unit_price': XPathField('cac:Price/cbc:PriceAmount', convert=to_decimal),
        'line_total': XPathField('cbc:LineExtensionAmount', convert=to_decimal),
        'tax_rate': XPathField(f'{_TAX_CATEGORY}/cbc:Percent', convert=to_decimal),
        'tax_category': XPathField(f'{_TAX_CATEGORY}/cbc:ID'),
        'tax_scheme': XPathField(f'{_TAX_CATEGORY}/cac:TaxScheme/cbc:ID'),
        'currency': XPathField('cbc:LineExtensionAmount/@currencyID'),
    }

    @classmethod
    def supported(cls) -> str:
        return "UBL 2.1 Invoice/CreditNote (XRechnung UBL, PEPPOL BIS)"
