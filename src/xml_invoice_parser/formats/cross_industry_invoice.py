"""
UN/CEFACT Cross Industry Invoice (CII D16B).

XML payload of ZUGFeRD 2.x and Factur-X hybrid invoices, and the CII
syntax of XRechnung. Line items precede the header trade agreement,
delivery and settlement blocks inside SupplyChainTradeTransaction.
"""

from xml_invoice_parser.formats.base import FormatModule
from xml_invoice_parser.formats.fields import (
    DIRECT_DEBIT_PREDICATE,
    XPathField,
    to_cefact_date,
    to_decimal,
    to_direct_debit,
)


CII_NS = 'urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100'

NAMESPACES = {
    'rsm': CII_NS,
    'ram': 'urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100',
    'udt': 'urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100',
}

_TRANSACTION = 'rsm:SupplyChainTradeTransaction'
_AGREEMENT = f'{_TRANSACTION}/ram:ApplicableHeaderTradeAgreement'
_SETTLEMENT = f'{_TRANSACTION}/ram:ApplicableHeaderTradeSettlement'
_SUMMATION = f'{_SETTLEMENT}/ram:SpecifiedTradeSettlementHeaderMonetarySummation'
_PAYMENT_MEANS = f'{_SETTLEMENT}/ram:SpecifiedTradeSettlementPaymentMeans'

_LINE_SETTLEMENT = 'ram:SpecifiedLineTradeSettlement'
_LINE_TAX = f'{_LINE_SETTLEMENT}/ram:ApplicableTradeTax'
_LINE_TOTAL = (
    f'{_LINE_SETTLEMENT}/ram:SpecifiedTradeSettlementLineMonetarySummation'
    f'/ram:LineTotalAmount'
)


class CrossIndustryInvoiceFormat(FormatModule):
    """UN/CEFACT CrossIndustryInvoice (ZUGFeRD 2.x, Factur-X, XRechnung CII)."""

    format_id = 'cross_industry_invoice'
    namespaces = NAMESPACES
    signature_tags = (f'{{{CII_NS}}}CrossIndustryInvoice',)
    signature_children = ('rsm:ExchangedDocument',)

    metadata_fields = {
        'invoice_number': XPathField('rsm:ExchangedDocument/ram:ID'),
        'type_code': XPathField('rsm:ExchangedDocument/ram:TypeCode'),
        'issue_date': XPathField(
            'rsm:ExchangedDocument/ram:IssueDateTime/udt:DateTimeString',
            convert=to_cefact_date
        ),
        'due_date': XPathField(
            f'{_SETTLEMENT}/ram:SpecifiedTradePaymentTerms/ram:DueDateDateTime/udt:DateTimeString',
            convert=to_cefact_date
        ),
        'currency': XPathField(f'{_SETTLEMENT}/ram:InvoiceCurrencyCode'),
        'seller_name': XPathField(f'{_AGREEMENT}/ram:SellerTradeParty/ram:Name'),
        'seller_vat_id': XPathField(
            f"{_AGREEMENT}/ram:SellerTradeParty/ram:SpecifiedTaxRegistration/ram:ID[@schemeID='VA']"
        ),
        'seller_tax_number': XPathField(
            f"{_AGREEMENT}/ram:SellerTradeParty/ram:SpecifiedTaxRegistration/ram:ID[@schemeID='FC']"
        ),
        'buyer_name': XPathField(f'{_AGREEMENT}/ram:BuyerTradeParty/ram:Name'),
        'iban': XPathField(f'{_PAYMENT_MEANS}/ram:PayeePartyCreditorFinancialAccount/ram:IBANID'),
        'direct_debit': XPathField(
            f'{_PAYMENT_MEANS}/ram:TypeCode{DIRECT_DEBIT_PREDICATE}',
            convert=to_direct_debit
        ),
        'net_total': XPathField(f'{_SUMMATION}/ram:TaxBasisTotalAmount', convert=to_decimal),
        # TaxTotalAmount repeats when a tax currency differs from the invoice currency
        'tax_total': XPathField(
            f'{_SUMMATION}/ram:TaxTotalAmount[@currencyID=../../ram:InvoiceCurrencyCode]',
            f'{_SUMMATION}/ram:TaxTotalAmount',
            convert=to_decimal
        ),
        'gross_total': XPathField(f'{_SUMMATION}/ram:GrandTotalAmount', convert=to_decimal),
        'amount_due': XPathField(f'{_SUMMATION}/ram:DuePayableAmount', convert=to_decimal),
    }

    line_xpath = f'{_TRANSACTION}/ram:IncludedSupplyChainTradeLineItem'

    item_fields = {
        'line_id': XPathField('ram:AssociatedDocumentLineDocument/ram:LineID'),
        'description': XPathField(
            'ram:SpecifiedTradeProduct/ram:Name',
            'ram:SpecifiedTradeProduct/ram:Description'
        ),
        'seller_item_id': XPathField('ram:SpecifiedTradeProduct/ram:SellerAssignedID'),
        'quantity': XPathField(
            'ram:SpecifiedLineTradeDelivery/ram:BilledQuantity',
            convert=to_decimal
        ),
        'unit_code': XPathField('ram:SpecifiedLineTradeDelivery/ram:BilledQuantity/@unitCode'),
        'unit_price': XPathField(
            'ram:SpecifiedLineTradeAgreement/ram:NetPriceProductTradePrice/ram:ChargeAmount',
            convert=to_decimal
        ),
        'line_total': XPathField(_LINE_TOTAL, convert=to_decimal),
        'tax_rate': XPathField(f'{_LINE_TAX}/ram:RateApplicablePercent', convert=to_decimal),
        'tax_category': XPathField(f'{_LINE_TAX}/ram:CategoryCode'),
        'tax_scheme': XPathField(f'{_LINE_TAX}/ram:TypeCode'),
        'currency': XPathField(f'{_LINE_TOTAL}/@currencyID'),
    }

    @classmethod
    def supported(cls) -> str:
        return "UN/CEFACT CrossIndustryInvoice (ZUGFeRD 2.x, Factur-X, XRechnung CII)"
