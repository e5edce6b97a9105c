"""
Result container returned by InvoiceParser.parse().

ParseResult is the only long-lived artifact of a parse call. Expected
failures (malformed XML, unknown dialect) are carried here with a message;
defects in format modules are raised instead and never reach this model.
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResultStatus(IntEnum):
    """Stable, externally observable parse status codes."""

    OK = 0
    XML_PARSE_FAILED = 1
    UNKNOWN_FORMAT = 2


class ParseResult(BaseModel):
    """
    Outcome of parsing one XML invoice.

    Invariants (enforced on construction):
    - status == OK  → metadata, items and format_id set; message is None
    - status != OK  → message set; metadata, items and format_id are None

    Attributes:
        status: One of ResultStatus
        message: Human-readable diagnostic for failed parses
        metadata: Canonical document metadata (keys = METADATA_KEYS)
        items: Canonical line items in document order (keys = ITEM_KEYS)
        format_id: Identifier of the format module that handled the document

    Example:
        >>> result = parse(xml_text)
        >>> if result.ok:
        ...     print(result.metadata['invoice_number'], len(result.items))
        ... else:
        ...     print(result.status.name, result.message)
    """

    status: ResultStatus
    message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    items: Optional[List[Dict[str, Any]]] = None
    format_id: Optional[str] = Field(
        default=None,
        examples=["ubl", "cross_industry_invoice", "cross_industry_document"]
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_status_consistency(self) -> 'ParseResult':
        """Reject results that mix success data with a failure status."""
        if self.status == ResultStatus.OK:
            if self.metadata is None or self.items is None or self.format_id is None:
                raise ValueError("OK results require metadata, items and format_id")
            if self.message is not None:
                raise ValueError("OK results must not carry a message")
        else:
            if not self.message:
                raise ValueError(f"{self.status.name} results require a message")
            if self.metadata is not None or self.items is not None:
                raise ValueError(f"{self.status.name} results must not carry invoice data")
            if self.format_id is not None:
                raise ValueError(f"{self.status.name} results must not carry a format_id")
        return self

    @property
    def ok(self) -> bool:
        """True when the document was parsed successfully."""
        return self.status == ResultStatus.OK

    @classmethod
    def success(
        cls,
        format_id: str,
        metadata: Dict[str, Any],
        items: List[Dict[str, Any]]
    ) -> 'ParseResult':
        return cls(
            status=ResultStatus.OK,
            metadata=metadata,
            items=items,
            format_id=format_id
        )

    @classmethod
    def failure(cls, status: ResultStatus, message: str) -> 'ParseResult':
        return cls(status=status, message=message)

    def __repr__(self) -> str:
        if self.ok:
            return (
                f"ParseResult(status=OK, format='{self.format_id}', "
                f"invoice='{self.metadata.get('invoice_number')}', "
                f"items={len(self.items)})"
            )
        return f"ParseResult(status={self.status.name})"
