"""Tax summary aggregation.

Builds a categorized rollup of a client's tax year from two inputs:

1. Extracted field rows of every document the client uploaded for the
   year, each joined with its document's filename and type.
2. The client's self-reported tax info (income sources, deductions,
   dependents).

Numeric field values are routed to income and withholding buckets by field
name. Within a single document, a gross figure is dropped when the matching
net figure is present, so one transaction is never counted twice:

- ``proceeds`` is dropped when the document has ``gain_loss``
- ``gross_receipts`` is dropped when the document has ``net_profit_loss``

The builder never raises on bad data. Amounts that do not parse, or parse
to zero, are skipped; missing client info contributes nothing.
"""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

import structlog

from .field_schema import ENTITY_NAME_FIELDS, field_label
from .models import (
    CLIENT_REPORTED_SOURCE,
    ClientTaxInfo,
    ExtractedDataRow,
    SummaryDependent,
    TaxLineItem,
    TaxSummary,
)

logger = structlog.get_logger()


# extracted_data field name -> income bucket
INCOME_FIELD_MAP: dict[str, str] = {
    'wages_tips_compensation': 'wages_income',
    'interest_income': 'interest_income',
    'ordinary_dividends': 'dividend_income',
    'qualified_dividends': 'dividend_income',
    'nonemployee_compensation': 'other_income',
    'gross_receipts': 'business_income',
    'net_profit_loss': 'business_income',
    'gain_loss': 'capital_gains',
    'proceeds': 'capital_gains',
    'rents': 'other_income',
    'royalties': 'other_income',
    'other_income': 'other_income',
    'amount': 'other_income',
}

# extracted_data field name -> withholding bucket
WITHHOLDING_FIELD_MAP: dict[str, str] = {
    'federal_tax_withheld': 'federal_withheld',
    'state_tax_withheld': 'state_withheld',
    'social_security_tax': 'social_security_tax',
    'medicare_tax': 'medicare_tax',
}

# Gross field -> net field that supersedes it on the same document
SUPERSEDED_BY: dict[str, str] = {
    'proceeds': 'gain_loss',
    'gross_receipts': 'net_profit_loss',
}

# Client-reported income type -> income bucket; unknown types go to other
CLIENT_INCOME_MAP: dict[str, str] = {
    'w2_wages': 'wages_income',
    '1099_int': 'interest_income',
    '1099_div': 'dividend_income',
    '1099_nec': 'other_income',
    '1099_misc': 'other_income',
    '1099_b': 'capital_gains',
    'business': 'business_income',
    'rental': 'other_income',
    'retirement': 'other_income',
    'social_security': 'other_income',
    'other': 'other_income',
}

DEFAULT_DOCUMENT_SOURCE = "Document"

_CENT = Decimal("0.01")


def parse_amount(value: Optional[str]) -> Optional[Decimal]:
    """
    Parse a user-entered amount.

    Surrounding whitespace, a dollar sign and thousands separators are
    tolerated. Anything else that is not a finite number yields None.
    """
    if value is None:
        return None

    cleaned = value.strip().replace('$', '').replace(',', '')
    if not cleaned:
        return None

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None
    return amount


def format_currency(amount: Union[Decimal, int, float]) -> str:
    """Format as US dollars, e.g. ``$1,234.50``; negatives as ``-$200.00``."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    # every integer digit plus the cents must fit in the working precision
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        rounded = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        if rounded < 0:
            return f"-${-rounded:,.2f}"
        return f"${abs(rounded):,.2f}"


def _document_sources(rows: list[ExtractedDataRow]) -> dict[str, str]:
    """Display label per document: its entity name if filled in, else its filename."""
    entity_names: dict[str, str] = {}
    for row in rows:
        if row.field_name in ENTITY_NAME_FIELDS and row.field_value:
            entity_names.setdefault(row.document_id, row.field_value)

    sources: dict[str, str] = {}
    for row in rows:
        if row.document is not None and row.document.file_name:
            sources[row.document_id] = entity_names.get(
                row.document_id, row.document.file_name
            )
    return sources


def _filled_fields(rows: list[ExtractedDataRow]) -> dict[str, set[str]]:
    """Field names with a non-empty value, per document."""
    filled: dict[str, set[str]] = defaultdict(set)
    for row in rows:
        if row.field_value:
            filled[row.document_id].add(row.field_name)
    return filled


def _add_document_fields(summary: TaxSummary, rows: list[ExtractedDataRow]) -> None:
    sources = _document_sources(rows)
    filled = _filled_fields(rows)

    for row in rows:
        amount = parse_amount(row.field_value)
        if amount is None or amount == 0:
            continue

        superseding_field = SUPERSEDED_BY.get(row.field_name)
        if superseding_field and superseding_field in filled[row.document_id]:
            logger.debug(
                "field_superseded",
                document_id=row.document_id,
                field_name=row.field_name,
                superseded_by=superseding_field,
            )
            continue

        bucket_names = [
            table[row.field_name]
            for table in (INCOME_FIELD_MAP, WITHHOLDING_FIELD_MAP)
            if row.field_name in table
        ]
        for bucket_name in bucket_names:
            getattr(summary, bucket_name).append(TaxLineItem(
                label=field_label(row.field_name),
                amount=amount,
                source=sources.get(row.document_id, DEFAULT_DOCUMENT_SOURCE),
                verified=row.manually_verified,
                document_id=row.document_id,
                field_id=row.id,
            ))


def _add_client_reported(summary: TaxSummary, tax_info: ClientTaxInfo) -> None:
    for src in tax_info.income_sources:
        amount = parse_amount(src.amount)
        if amount is None or amount == 0:
            continue

        bucket_name = CLIENT_INCOME_MAP.get(src.type, 'other_income')
        getattr(summary, bucket_name).append(TaxLineItem(
            label=src.source_name or src.type,
            amount=amount,
            source=CLIENT_REPORTED_SOURCE,
            verified=False,
        ))

    for ded in tax_info.deductions:
        amount = parse_amount(ded.amount)
        if amount is None or amount == 0:
            continue

        summary.client_deductions.append(TaxLineItem(
            label=ded.description or ded.category,
            amount=amount,
            source=CLIENT_REPORTED_SOURCE,
            verified=False,
        ))

    summary.dependents = [
        SummaryDependent(name=d.name, relationship=d.relationship, dob=d.date_of_birth)
        for d in tax_info.dependents
    ]


def build_tax_summary(
    rows: list[ExtractedDataRow],
    client_tax_info: Optional[ClientTaxInfo] = None,
) -> TaxSummary:
    """
    Build the tax summary for one client and tax year.

    Args:
        rows: Extracted field rows for the client's documents, joined with
            each document's filename and type
        client_tax_info: The client's self-reported data, if any

    Returns:
        A fresh TaxSummary. Line items keep input order within each bucket.
    """
    summary = TaxSummary()

    _add_document_fields(summary, rows)
    if client_tax_info is not None:
        _add_client_reported(summary, client_tax_info)

    logger.debug(
        "tax_summary_built",
        field_rows=len(rows),
        documents=len({row.document_id for row in rows}),
        total_income=str(summary.total_income),
        client_reported=client_tax_info is not None,
    )
    return summary
