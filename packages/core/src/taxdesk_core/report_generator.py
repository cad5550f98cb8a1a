"""Report generation for tax preparation summaries.

Renders a ``TaxSummary`` as the flat, categorized export preparers download
from the tax-prep workspace. Each line item is printed as
``<source> - <label>: <amount>`` with a ``[Verified]`` marker once the
preparer has confirmed the underlying field.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import structlog

from .models import TaxLineItem, TaxSummary, sum_items
from .summary_builder import format_currency

logger = structlog.get_logger()


INCOME_CATEGORY_LABELS: tuple[tuple[str, str], ...] = (
    ("wages_income", "Wages & Salary"),
    ("interest_income", "Interest Income"),
    ("dividend_income", "Dividend Income"),
    ("business_income", "Business Income"),
    ("capital_gains", "Capital Gains"),
    ("other_income", "Other Income"),
)

SUPPORTED_FORMATS = ("text", "markdown")

FILE_EXTENSIONS = {"text": ".txt", "markdown": ".md"}


@dataclass
class ReportSection:
    """A section of the report."""
    title: str
    lines: list[str] = field(default_factory=list)


def export_filename(client_name: str, tax_year: int, format: str = "text") -> str:
    """Download name for a client's summary, e.g. ``tax-summary-Jane_Doe-2024.txt``.

    Markdown exports get a ``.md`` extension.
    """
    name = re.sub(r'\s+', '_', client_name)
    return f"tax-summary-{name}-{tax_year}{FILE_EXTENSIONS.get(format, '.txt')}"


def _format_date(value: date) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def _item_line(item: TaxLineItem) -> str:
    verified = " [Verified]" if item.verified else ""
    return f"{item.source} - {item.label}: {format_currency(item.amount)}{verified}"


class TaxSummaryReportGenerator:
    """
    Generate the tax preparation summary export.

    Reports include:
    - Income by category, one line per item
    - Total income
    - Withholding totals (federal, state, social security, Medicare)
    - Client-reported deductions, when any
    - Dependents, when any
    """

    def __init__(self):
        """Initialize the report generator."""
        self._sections: list[ReportSection] = []
        self._header: list[str] = []

    def generate(
        self,
        summary: TaxSummary,
        client_name: str,
        tax_year: int,
        client_email: Optional[str] = None,
        format: str = "text",
        generated_on: Optional[date] = None,
    ) -> str:
        """
        Generate a tax preparation summary report.

        Args:
            summary: The built tax summary
            client_name: Client's full name
            tax_year: Tax year the summary covers
            client_email: Client's email, shown next to the name
            format: Output format ("text" or "markdown")
            generated_on: Report date (default: today)

        Returns:
            Formatted report string
        """
        self._sections = []
        self._add_header(client_name, client_email, tax_year, generated_on or date.today())
        self._add_income(summary)
        self._add_withholdings(summary)
        self._add_deductions(summary)
        self._add_dependents(summary)

        logger.info(
            "summary_report_generated",
            tax_year=tax_year,
            format=format,
            sections=len(self._sections),
        )

        if format == "markdown":
            return self._format_markdown()
        return self._format_text()

    def _add_header(
        self,
        client_name: str,
        client_email: Optional[str],
        tax_year: int,
        generated_on: date,
    ) -> None:
        client = f"{client_name} ({client_email})" if client_email else client_name
        self._header = [
            f"TAX PREPARATION SUMMARY - {tax_year}",
            f"Client: {client}",
            f"Generated: {_format_date(generated_on)}",
        ]

    def _add_income(self, summary: TaxSummary) -> None:
        lines = []
        buckets = summary.income_buckets
        for attr, label in INCOME_CATEGORY_LABELS:
            items = buckets[attr]
            if not items:
                continue
            lines.append("")
            lines.append(f"{label}:")
            lines.extend(f"  {_item_line(item)}" for item in items)

        lines.append("")
        lines.append(f"TOTAL INCOME: {format_currency(summary.total_income)}")
        self._sections.append(ReportSection(title="INCOME", lines=lines))

    def _add_withholdings(self, summary: TaxSummary) -> None:
        lines = [
            f"Federal Tax Withheld: {format_currency(summary.total_federal_withheld)}",
            f"State Tax Withheld: {format_currency(summary.total_state_withheld)}",
            f"Social Security Tax: {format_currency(sum_items(summary.social_security_tax))}",
            f"Medicare Tax: {format_currency(sum_items(summary.medicare_tax))}",
        ]
        self._sections.append(ReportSection(title="WITHHOLDINGS", lines=lines))

    def _add_deductions(self, summary: TaxSummary) -> None:
        if not summary.client_deductions:
            return
        lines = [
            f"  {d.label}: {format_currency(d.amount)}"
            for d in summary.client_deductions
        ]
        lines.append(f"TOTAL DEDUCTIONS: {format_currency(summary.total_client_deductions)}")
        self._sections.append(ReportSection(title="DEDUCTIONS (Client-Reported)", lines=lines))

    def _add_dependents(self, summary: TaxSummary) -> None:
        if not summary.dependents:
            return
        lines = [
            f"  {d.name} ({d.relationship}) - DOB: {d.dob}"
            for d in summary.dependents
        ]
        self._sections.append(ReportSection(title="DEPENDENTS", lines=lines))

    def _format_text(self) -> str:
        """Format report as plain text."""
        output = list(self._header)
        output.append("")

        for i, section in enumerate(self._sections):
            if i > 0:
                output.append("")
            output.append(f"=== {section.title} ===")
            output.extend(section.lines)

        return "\n".join(output)

    def _format_markdown(self) -> str:
        """Format report as Markdown."""
        title, *details = self._header
        output = [f"# {title}", ""]
        for line in details:
            key, value = line.split(": ", 1)
            output.append(f"**{key}:** {value}  ")

        for section in self._sections:
            output.append(f"\n## {section.title.title()}\n")
            output.append("```")
            output.extend(section.lines)
            output.append("```")

        return "\n".join(output)
