"""Tax-prep workspace.

Builds a client's year-end summary from stored documents and the client's
self-reported tax info, and exports it for the preparer.
"""

from datetime import date
from pathlib import Path
from typing import Optional

import structlog

from taxdesk_core.exceptions import ConfigurationError
from taxdesk_core.models import ClientTaxInfo
from taxdesk_core.report_generator import (
    SUPPORTED_FORMATS,
    TaxSummaryReportGenerator,
    export_filename,
)
from taxdesk_core.summary_builder import build_tax_summary

from .config import WorkspaceConfig
from .interfaces import ClientSummaryView, DocumentRepository

logger = structlog.get_logger()


class TaxPrepWorkspace:
    """
    Summary building and export for one preparer's clients.

    Example:
        workspace = TaxPrepWorkspace(repository)
        view = workspace.build_summary("client-1", 2024, client_name="Jane Doe")
        filename, content = workspace.export("client-1", "Jane Doe", None, 2024)
    """

    def __init__(
        self,
        repository: DocumentRepository,
        config: Optional[WorkspaceConfig] = None,
    ):
        self.repository = repository
        self.config = config or WorkspaceConfig()
        self.report_generator = TaxSummaryReportGenerator()

    def build_summary(
        self,
        client_id: str,
        tax_year: int,
        client_name: str = "",
        client_email: Optional[str] = None,
    ) -> ClientSummaryView:
        """
        Build the summary for a client and tax year.

        Args:
            client_id: Client identifier
            tax_year: Tax year to summarize
            client_name: Shown with the summary
            client_email: Shown with the summary

        Returns:
            The summary with its client details
        """
        documents = self.repository.list_documents(client_id, tax_year)
        rows = self.repository.list_extracted_fields([doc.id for doc in documents])
        tax_info = ClientTaxInfo.from_blob(self.repository.get_client_tax_info(client_id))

        summary = build_tax_summary(rows, tax_info)

        logger.info(
            "workspace_summary_built",
            client_id=client_id,
            tax_year=tax_year,
            documents=len(documents),
            field_rows=len(rows),
            total_income=str(summary.total_income),
        )
        return ClientSummaryView(
            client_id=client_id,
            client_name=client_name,
            client_email=client_email,
            tax_year=tax_year,
            document_count=len(documents),
            summary=summary,
        )

    def export(
        self,
        client_id: str,
        client_name: str,
        client_email: Optional[str],
        tax_year: int,
        format: Optional[str] = None,
        generated_on: Optional[date] = None,
    ) -> tuple[str, str]:
        """
        Render a client's summary for download.

        Args:
            client_id: Client identifier
            client_name: Client's full name
            client_email: Client's email, if known
            tax_year: Tax year to summarize
            format: "text" or "markdown" (default: configured format)
            generated_on: Report date (default: today)

        Returns:
            (filename, content)

        Raises:
            ConfigurationError: If the format is not supported
        """
        export_format = (format or self.config.export_format).lower()
        if export_format not in SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"Unsupported export format: {export_format}",
                config_key="TAXDESK_WORKSPACE_EXPORT_FORMAT",
                expected=" or ".join(SUPPORTED_FORMATS),
                actual=export_format,
            )

        view = self.build_summary(client_id, tax_year, client_name, client_email)
        content = self.report_generator.generate(
            view.summary,
            client_name=client_name,
            tax_year=tax_year,
            client_email=client_email,
            format=export_format,
            generated_on=generated_on,
        )
        return export_filename(client_name, tax_year, export_format), content

    def write_export(
        self,
        client_id: str,
        client_name: str,
        client_email: Optional[str],
        tax_year: int,
        format: Optional[str] = None,
        generated_on: Optional[date] = None,
    ) -> Path:
        """
        Export a client's summary to a file under the export directory.

        Returns:
            Path of the written file
        """
        filename, content = self.export(
            client_id, client_name, client_email, tax_year, format, generated_on
        )
        export_dir = Path(self.config.export_dir)
        export_dir.mkdir(parents=True, exist_ok=True)
        path = export_dir / filename
        path.write_text(content, encoding="utf-8")

        logger.info("summary_exported", client_id=client_id, tax_year=tax_year, path=str(path))
        return path
