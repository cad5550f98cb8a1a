"""Data models for taxdesk-core.

This package provides:
- Document taxonomy, seeded fields and persisted rows (documents.py)
- Tax summary line items and client self-reported data (summary.py)
"""

from taxdesk_core.models.documents import (
    # Enumerations
    DocumentType,
    ExtractionMethod,
    DocumentStatus,
    # Classification
    ClassificationResult,
    # Fields and rows
    ExtractedField,
    DocumentRef,
    ExtractedDataRow,
    DocumentRow,
    # Confidence scale conversion
    to_persisted_confidence,
    from_persisted_confidence,
)

from taxdesk_core.models.summary import (
    # Constants
    CLIENT_REPORTED_SOURCE,
    # Summary
    TaxLineItem,
    SummaryDependent,
    TaxSummary,
    sum_items,
    # Client self-reported
    ClientIncomeSource,
    ClientDeduction,
    ClientDependent,
    ClientTaxInfo,
)

__all__ = [
    "DocumentType",
    "ExtractionMethod",
    "DocumentStatus",
    "ClassificationResult",
    "ExtractedField",
    "DocumentRef",
    "ExtractedDataRow",
    "DocumentRow",
    "to_persisted_confidence",
    "from_persisted_confidence",
    "CLIENT_REPORTED_SOURCE",
    "TaxLineItem",
    "SummaryDependent",
    "TaxSummary",
    "sum_items",
    "ClientIncomeSource",
    "ClientDeduction",
    "ClientDependent",
    "ClientTaxInfo",
]
