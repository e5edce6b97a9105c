"""
Rendering of parse results as plain text and pandas DataFrames.

Column order follows the canonical model field order so exported files
look the same whatever dialect the invoices came in.
"""

from typing import Any, Dict, List, Mapping

import pandas as pd

from xml_invoice_parser.models.invoice import InvoiceItem, InvoiceMetadata
from xml_invoice_parser.models.result import ParseResult


METADATA_COLUMNS: List[str] = list(InvoiceMetadata.model_fields)
ITEM_COLUMNS: List[str] = list(InvoiceItem.model_fields)


def _require_ok(result: ParseResult) -> None:
    if not result.ok:
        raise ValueError(
            f"Cannot export a failed parse result ({result.status.name})"
        )


def _format_value(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'yes' if value else 'no'
    return str(value)


def result_to_text(result: ParseResult) -> str:
    """
    Render metadata and items as aligned "key: value" blocks.

    Raises:
        ValueError: If result is not OK
    """
    _require_ok(result)

    width = max(len(key) for key in METADATA_COLUMNS + ITEM_COLUMNS)
    lines = [f"Format: {result.format_id}", ""]

    for key in METADATA_COLUMNS:
        lines.append(f"{key:<{width}}  {_format_value(result.metadata[key])}")

    for position, item in enumerate(result.items, start=1):
        lines.append("")
        lines.append(f"Item {position}")
        for key in ITEM_COLUMNS:
            lines.append(f"  {key:<{width}}  {_format_value(item[key])}")

    return "\n".join(lines)


def items_to_dataframe(results: Mapping[str, ParseResult]) -> pd.DataFrame:
    """
    One row per line item across all results.

    Args:
        results: Source name (e.g. file path) → OK ParseResult

    Returns:
        DataFrame with a 'file' column followed by the canonical item keys

    Raises:
        ValueError: If any result is not OK
    """
    rows: List[Dict[str, Any]] = []
    for source, result in results.items():
        _require_ok(result)
        for item in result.items:
            rows.append({'file': source, **item})
    return pd.DataFrame(rows, columns=['file'] + ITEM_COLUMNS)


def metadata_to_dataframe(results: Mapping[str, ParseResult]) -> pd.DataFrame:
    """
    One row of document metadata per result.

    Raises:
        ValueError: If any result is not OK
    """
    rows: List[Dict[str, Any]] = []
    for source, result in results.items():
        _require_ok(result)
        rows.append({'file': source, 'format': result.format_id, **result.metadata})
    return pd.DataFrame(rows, columns=['file', 'format'] + METADATA_COLUMNS)
