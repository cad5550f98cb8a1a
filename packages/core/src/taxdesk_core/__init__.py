"""TaxDesk Core - Document classification and tax summary aggregation."""

__version__ = "0.1.0"

from .classifier import (
    classify_document,
    describe_classification,
    extract_name_from_filename,
)
from .field_schema import expected_fields, field_label, requires_data_entry
from .field_seeder import seed_fields
from .models import ClassificationResult, ClientTaxInfo, DocumentType, TaxSummary
from .report_generator import TaxSummaryReportGenerator
from .summary_builder import build_tax_summary, format_currency

__all__ = [
    "classify_document",
    "describe_classification",
    "extract_name_from_filename",
    "expected_fields",
    "field_label",
    "requires_data_entry",
    "seed_fields",
    "build_tax_summary",
    "format_currency",
    "TaxSummaryReportGenerator",
    "ClassificationResult",
    "ClientTaxInfo",
    "DocumentType",
    "TaxSummary",
]
