"""CLI entrypoints: dump XML invoices as text (xmlinvoice2txt) or CSV (xmlinvoice2csv)."""

import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple

from xml_invoice_parser.config import get_app_config
from xml_invoice_parser.export import (
    items_to_dataframe,
    metadata_to_dataframe,
    result_to_text,
)
from xml_invoice_parser.messages import render_message
from xml_invoice_parser.models.result import ParseResult
from xml_invoice_parser.parser import InvoiceParser, parse_file


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=get_app_config().log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_all(paths: List[str]) -> Tuple[Dict[str, ParseResult], bool]:
    """Parse every path; report failures on stderr. Returns (ok results, all_ok)."""
    parser = InvoiceParser()
    results: Dict[str, ParseResult] = {}
    all_ok = True

    for path in paths:
        try:
            result = parse_file(path, parser=parser)
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            print(render_message('file_failed', path, e.strerror or e), file=sys.stderr)
            all_ok = False
            continue

        if not result.ok:
            logger.error(f"{path}: {result.status.name}")
            print(render_message('file_failed', path, result.message), file=sys.stderr)
            all_ok = False
            continue

        results[path] = result

    return results, all_ok


def main_txt(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the contents of XML invoices (UBL, CII, ZUGFeRD 1.0) as text"
    )
    parser.add_argument("files", nargs="+", help="XML invoice files")
    args = parser.parse_args(argv)
    _configure_logging()

    results, all_ok = _parse_all(args.files)

    blocks = []
    for path, result in results.items():
        header = f"== {path}" if len(args.files) > 1 else None
        text = result_to_text(result)
        blocks.append(f"{header}\n{text}" if header else text)
    if blocks:
        print("\n\n".join(blocks))

    return 0 if all_ok else 1


def main_csv(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Export line items (or metadata) of XML invoices as CSV"
    )
    parser.add_argument("files", nargs="+", help="XML invoice files")
    parser.add_argument("-o", "--output", help="Output CSV path (default: stdout)")
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Write one row of document metadata per file instead of line items",
    )
    args = parser.parse_args(argv)
    _configure_logging()

    results, all_ok = _parse_all(args.files)

    if args.metadata:
        df = metadata_to_dataframe(results)
    else:
        df = items_to_dataframe(results)

    separator = get_app_config().csv_separator
    if args.output:
        df.to_csv(args.output, index=False, sep=separator, encoding='utf-8')
        logger.info(f"Wrote {len(df)} rows to {args.output}")
    else:
        df.to_csv(sys.stdout, index=False, sep=separator)

    return 0 if all_ok else 1


if __name__ == "__main__":
    raise SystemExit(main_txt())
