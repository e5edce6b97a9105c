"""
Canonical invoice models shared by every format module.

The field names of InvoiceMetadata and InvoiceItem ARE the canonical key
sets. Every field is required but nullable, and unknown fields are
forbidden, so a format module can neither drop nor invent a key:

- Missing value in the document → None (never a missing key)
- Missing key in the module's output → ValidationError
- Extra key in the module's output → ValidationError
"""

from datetime import date
from decimal import Decimal
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


class InvoiceMetadata(BaseModel):
    """
    Document-level invoice data, independent of the source dialect.

    Example:
        >>> meta = InvoiceMetadata(
        ...     invoice_number="RE-2024-0815", type_code="380",
        ...     issue_date=date(2024, 3, 1), due_date=None, currency="EUR",
        ...     seller_name="Lieferant GmbH", seller_vat_id="DE123456789",
        ...     seller_tax_number=None, buyer_name="Kunde AG", iban=None,
        ...     direct_debit=False, net_total=Decimal("20.00"),
        ...     tax_total=Decimal("3.80"), gross_total=Decimal("23.80"),
        ...     amount_due=Decimal("23.80"),
        ... )
        >>> meta.currency
        'EUR'
    """

    # === Document identity ===
    invoice_number: Optional[str] = Field(
        ...,
        description="Invoice number assigned by the seller",
        examples=["RE-2024-0815"]
    )

    type_code: Optional[str] = Field(
        ...,
        description="UNTDID 1001 document type code (380 = invoice, 381 = credit note)",
        examples=["380"]
    )

    issue_date: Optional[date] = Field(
        ...,
        description="Date the invoice was issued"
    )

    due_date: Optional[date] = Field(
        ...,
        description="Payment due date"
    )

    currency: Optional[str] = Field(
        ...,
        description="ISO 4217 invoice currency code",
        examples=["EUR"]
    )

    # === Parties ===
    seller_name: Optional[str] = Field(
        ...,
        description="Seller (creditor) company name"
    )

    seller_vat_id: Optional[str] = Field(
        ...,
        description="Seller VAT identifier",
        examples=["DE123456789"]
    )

    seller_tax_number: Optional[str] = Field(
        ...,
        description="Seller national tax number, often present when there is no VAT id",
        examples=["201/113/40209"]
    )

    buyer_name: Optional[str] = Field(
        ...,
        description="Buyer (debtor) company name"
    )

    # === Payment ===
    iban: Optional[str] = Field(
        ...,
        description="Creditor account IBAN"
    )

    direct_debit: bool = Field(
        ...,
        description="True when the invoice is settled by direct debit"
    )

    # === Totals ===
    net_total: Optional[Decimal] = Field(
        ...,
        description="Invoice total without tax"
    )

    tax_total: Optional[Decimal] = Field(
        ...,
        description="Total tax amount in invoice currency"
    )

    gross_total: Optional[Decimal] = Field(
        ...,
        description="Invoice total with tax included"
    )

    amount_due: Optional[Decimal] = Field(
        ...,
        description="Amount still payable after prepayments"
    )

    model_config = ConfigDict(frozen=True, extra='forbid')


class InvoiceItem(BaseModel):
    """One invoice line, independent of the source dialect."""

    line_id: Optional[str] = Field(..., description="Line identifier within the invoice")
    description: Optional[str] = Field(..., description="Item name or description")
    seller_item_id: Optional[str] = Field(..., description="Seller's article number")
    quantity: Optional[Decimal] = Field(..., description="Invoiced quantity")
    unit_code: Optional[str] = Field(
        ...,
        description="UN/ECE Rec 20 unit of measure",
        examples=["C62", "HUR"]
    )
    unit_price: Optional[Decimal] = Field(..., description="Net price per unit")
    line_total: Optional[Decimal] = Field(..., description="Net line amount")
    tax_rate: Optional[Decimal] = Field(..., description="Tax rate in percent")
    tax_category: Optional[str] = Field(
        ...,
        description="UNCL 5305 tax category code",
        examples=["S", "Z", "E"]
    )
    tax_scheme: Optional[str] = Field(..., description="Tax scheme", examples=["VAT"])
    currency: Optional[str] = Field(..., description="Currency of the line amounts")

    model_config = ConfigDict(frozen=True, extra='forbid')


METADATA_KEYS: FrozenSet[str] = frozenset(InvoiceMetadata.model_fields)
ITEM_KEYS: FrozenSet[str] = frozenset(InvoiceItem.model_fields)
