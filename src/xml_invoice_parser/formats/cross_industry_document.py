"""
ZUGFeRD 1.0 CrossIndustryDocument.

Predecessor of the CII D16B syntax. Same building blocks, older names:
HeaderExchangedDocument instead of ExchangedDocument, the "SupplyChain"
infix on trade agreement/delivery/settlement, ApplicablePercent instead of
RateApplicablePercent. Does not fully satisfy EN16931.
"""

from xml_invoice_parser.formats.base import FormatModule
from xml_invoice_parser.formats.fields import (
    DIRECT_DEBIT_PREDICATE,
    XPathField,
    to_cefact_date,
    to_decimal,
    to_direct_debit,
)


CID_NS = 'urn:ferd:CrossIndustryDocument:invoice:1p0'

NAMESPACES = {
    'rsm': CID_NS,
    'ram': 'urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:12',
    'udt': 'urn:un:unece:uncefact:data:standard:UnqualifiedDataType:15',
}

_HEADER = 'rsm:HeaderExchangedDocument'
_TRANSACTION = 'rsm:SpecifiedSupplyChainTradeTransaction'
_AGREEMENT = f'{_TRANSACTION}/ram:ApplicableSupplyChainTradeAgreement'
_SETTLEMENT = f'{_TRANSACTION}/ram:ApplicableSupplyChainTradeSettlement'
_SUMMATION = f'{_SETTLEMENT}/ram:SpecifiedTradeSettlementMonetarySummation'
_PAYMENT_MEANS = f'{_SETTLEMENT}/ram:SpecifiedTradeSettlementPaymentMeans'

_LINE_SETTLEMENT = 'ram:SpecifiedSupplyChainTradeSettlement'
_LINE_TAX = f'{_LINE_SETTLEMENT}/ram:ApplicableTradeTax'
_LINE_TOTAL = f'{_LINE_SETTLEMENT}/ram:SpecifiedTradeSettlementMonetarySummation/ram:LineTotalAmount'


class CrossIndustryDocumentFormat(FormatModule):
    """ZUGFeRD 1.0 CrossIndustryDocument."""

    format_id = 'cross_industry_document'
    namespaces = NAMESPACES
    signature_tags = (f'{{{CID_NS}}}CrossIndustryDocument',)
    signature_children = (_HEADER,)

    metadata_fields = {
        'invoice_number': XPathField(f'{_HEADER}/ram:ID'),
        'type_code': XPathField(f'{_HEADER}/ram:TypeCode'),
        'issue_date': XPathField(
            f'{_HEADER}/ram:IssueDateTime/udt:DateTimeString',
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
        'tax_total': XPathField(f'{_SUMMATION}/ram:TaxTotalAmount', convert=to_decimal),
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
            'ram:SpecifiedSupplyChainTradeDelivery/ram:BilledQuantity',
            convert=to_decimal
        ),
        'unit_code': XPathField('ram:SpecifiedSupplyChainTradeDelivery/ram:BilledQuantity/@unitCode'),
        'unit_price': XPathField(
            'ram:SpecifiedSupplyChainTradeAgreement/ram:NetPriceProductTradePrice/ram:ChargeAmount',
            convert=to_decimal
        ),
        'line_total': XPathField(_LINE_TOTAL, convert=to_decimal),
        'tax_rate': XPathField(f'{_LINE_TAX}/ram:ApplicablePercent', convert=to_decimal),
        'tax_category': XPathField(f'{_LINE_TAX}/ram:CategoryCode'),
        'tax_scheme': XPathField(f'{_LINE_TAX}/ram:TypeCode'),
        'currency': XPathField(f'{_LINE_TOTAL}/@currencyID'),
    }

    @classmethod
    def supported(cls) -> str:
        return "ZUGFeRD 1.0 CrossIndustryDocument"
