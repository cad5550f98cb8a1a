"""
TaxDesk command line interface.

Usage:
    taxdesk classify W2_Acme_2024.pdf 1099-DIV_Fidelity_2024.pdf
    taxdesk summarize --fields rows.json --client-name "Jane Doe" --tax-year 2024
    taxdesk summarize --fields rows.json --tax-info tax_info.json \\
        --client-name "Jane Doe" --client-email jane@example.com \\
        --tax-year 2024 --format markdown --output summary.md

``--fields`` is a JSON array of extracted field rows, each with its joined
``document`` ({"file_name": ..., "document_type": ...}). ``--tax-info`` is
the client's tax-info object ({"income_sources": [...], "deductions": [...],
"dependents": [...]}).
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as ModelValidationError

from taxdesk_core.classifier import classify_document, describe_classification, document_type_label
from taxdesk_core.field_schema import field_label
from taxdesk_core.field_seeder import seed_fields
from taxdesk_core.models import ClientTaxInfo, ExtractedDataRow
from taxdesk_core.report_generator import SUPPORTED_FORMATS, TaxSummaryReportGenerator, export_filename
from taxdesk_core.summary_builder import build_tax_summary

from .config import TaxDeskConfig

logger = structlog.get_logger()

_ROWS = TypeAdapter(list[ExtractedDataRow])


def configure_logging(log_level: str) -> None:
    """Send structlog output to stderr, filtered at ``log_level``."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_json(path: str):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def cmd_classify(args: argparse.Namespace) -> int:
    """Print the classification and seeded fields of each filename."""
    for i, filename in enumerate(args.files):
        if i > 0:
            print()
        result = classify_document(filename)
        print(filename)
        print(f"  Type:        {result.document_type.value} ({document_type_label(result.document_type)})")
        print(f"  Confidence:  {result.confidence:.0%}")
        print(f"  Description: {describe_classification(result)}")

        fields = seed_fields(filename, result.document_type)
        if not fields:
            print("  Fields:      (none)")
            continue
        print("  Fields:")
        for f in fields:
            value = f"{f.field_value} ({f.confidence:.0%})" if f.field_value else "-"
            print(f"    {field_label(f.field_name)}: {value}")
    return 0


def cmd_summarize(args: argparse.Namespace) -> int:
    """Build the summary export from field rows and optional tax info."""
    try:
        rows = _ROWS.validate_python(_load_json(args.fields))
        tax_info = (
            ClientTaxInfo.from_blob(_load_json(args.tax_info)) if args.tax_info else None
        )
    except (OSError, json.JSONDecodeError, ModelValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    summary = build_tax_summary(rows, tax_info)
    content = TaxSummaryReportGenerator().generate(
        summary,
        client_name=args.client_name,
        tax_year=args.tax_year,
        client_email=args.client_email,
        format=args.format,
    )

    if args.output:
        output = Path(args.output)
        if output.is_dir():
            output = output / export_filename(args.client_name, args.tax_year, args.format)
        output.write_text(content + "\n", encoding="utf-8")
        logger.info("summary_written", path=str(output))
        print(f"Summary written to {output}")
    else:
        print(content)
    return 0


def build_parser(config: TaxDeskConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taxdesk",
        description="Classify tax documents and build tax preparation summaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify uploads by filename
  taxdesk classify W2_Acme_2024.pdf 1099-DIV_Fidelity_2024.pdf

  # Build a client's summary
  taxdesk summarize --fields rows.json --tax-info info.json \\
      --client-name "Jane Doe" --tax-year 2024
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify = subparsers.add_parser(
        "classify",
        help="Classify documents from their filenames",
    )
    classify.add_argument(
        "files",
        nargs="+",
        help="Filenames to classify (files are not opened)"
    )
    classify.set_defaults(func=cmd_classify)

    summarize = subparsers.add_parser(
        "summarize",
        help="Build a tax preparation summary",
    )
    summarize.add_argument(
        "--fields",
        type=str,
        required=True,
        help="JSON file with extracted field rows (required)"
    )
    summarize.add_argument(
        "--tax-info",
        type=str,
        default=None,
        help="JSON file with the client's self-reported tax info"
    )
    summarize.add_argument(
        "--client-name",
        type=str,
        required=True,
        help="Client's full name (required)"
    )
    summarize.add_argument(
        "--client-email",
        type=str,
        default=None,
        help="Client's email"
    )
    summarize.add_argument(
        "--tax-year",
        type=int,
        required=True,
        help="Tax year (required)"
    )
    summarize.add_argument(
        "--format",
        choices=SUPPORTED_FORMATS,
        default=config.workspace.export_format,
        help=f"Output format (default: {config.workspace.export_format})"
    )
    summarize.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write to this file or directory instead of stdout"
    )
    summarize.set_defaults(func=cmd_summarize)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the taxdesk command."""
    config = TaxDeskConfig()
    configure_logging(config.log_level)

    args = build_parser(config).parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
