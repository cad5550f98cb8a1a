"""
In-memory document repository.

Backs the portal services in tests, demos and the CLI. A deployment would
swap in a database-backed class with the same methods (see
``taxdesk_portal.interfaces.DocumentRepository``).
"""

import copy
from typing import Any, Optional

import structlog

from taxdesk_core.exceptions import RecordNotFoundError
from taxdesk_core.models import DocumentRow, ExtractedDataRow

logger = structlog.get_logger()


class InMemoryDocumentRepository:
    """
    Dict-backed storage for documents, field rows and client tax info.

    Rows are copied on the way in and out, so callers never hold a
    reference to stored state. Field rows are stored without their document
    reference and joined on read.
    """

    def __init__(self):
        self._documents: dict[str, DocumentRow] = {}
        self._fields: dict[str, ExtractedDataRow] = {}
        self._tax_info: dict[str, dict[str, Any]] = {}

    def insert_document(self, document: DocumentRow) -> DocumentRow:
        """
        Store a new document.

        Args:
            document: Document row with its id already assigned

        Returns:
            The stored document
        """
        self._documents[document.id] = document.model_copy(deep=True)
        logger.debug("document_inserted", document_id=document.id)
        return document.model_copy(deep=True)

    def get_document(self, document_id: str) -> Optional[DocumentRow]:
        doc = self._documents.get(document_id)
        return doc.model_copy(deep=True) if doc is not None else None

    def list_documents(self, client_id: str, tax_year: int) -> list[DocumentRow]:
        """
        Retrieve a client's documents for one tax year.

        Args:
            client_id: Client identifier
            tax_year: Tax year to filter on

        Returns:
            Documents in upload order
        """
        return [
            doc.model_copy(deep=True)
            for doc in self._documents.values()
            if doc.client_id == client_id and doc.tax_year == tax_year
        ]

    def insert_extracted_fields(
        self, rows: list[ExtractedDataRow]
    ) -> list[ExtractedDataRow]:
        for row in rows:
            self._fields[row.id] = row.model_copy(update={"document": None}, deep=True)
        logger.debug("extracted_fields_inserted", count=len(rows))
        return [self._joined(self._fields[row.id]) for row in rows]

    def get_extracted_field(self, field_id: str) -> Optional[ExtractedDataRow]:
        row = self._fields.get(field_id)
        return self._joined(row) if row is not None else None

    def update_extracted_field(self, row: ExtractedDataRow) -> ExtractedDataRow:
        """
        Replace a stored field row.

        Raises:
            RecordNotFoundError: If no row with ``row.id`` is stored
        """
        if row.id not in self._fields:
            raise RecordNotFoundError(
                f"Extracted field {row.id} not found",
                record_type="extracted_data",
                record_id=row.id,
            )
        self._fields[row.id] = row.model_copy(update={"document": None}, deep=True)
        return self._joined(self._fields[row.id])

    def list_extracted_fields(self, document_ids: list[str]) -> list[ExtractedDataRow]:
        """
        Retrieve field rows for a set of documents.

        Args:
            document_ids: Documents whose rows to return

        Returns:
            Rows in insertion order, each with its document joined
        """
        wanted = set(document_ids)
        return [
            self._joined(row)
            for row in self._fields.values()
            if row.document_id in wanted
        ]

    def get_client_tax_info(self, client_id: str) -> Optional[dict[str, Any]]:
        return copy.deepcopy(self._tax_info.get(client_id))

    def set_client_tax_info(self, client_id: str, tax_info: Optional[dict[str, Any]]) -> None:
        """Store (or clear, with None) a client's tax-info blob."""
        if tax_info is None:
            self._tax_info.pop(client_id, None)
        else:
            self._tax_info[client_id] = copy.deepcopy(tax_info)

    def _joined(self, row: ExtractedDataRow) -> ExtractedDataRow:
        doc = self._documents.get(row.document_id)
        return row.model_copy(
            update={"document": doc.as_ref() if doc is not None else None},
            deep=True,
        )
