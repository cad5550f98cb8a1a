"""Storage-agnostic repository interface for the TaxDesk portal.

The portal services talk to storage only through ``DocumentRepository``.
It uses Python's structural subtyping via ``typing.Protocol``: any class
with matching method signatures is compatible, no explicit inheritance
required. The in-memory store in ``taxdesk_portal.memory_store`` is the
reference implementation; a database-backed store needs only the same
methods.

Example Usage:
    ```python
    from taxdesk_portal.interfaces.base import DocumentRepository

    class PostgresDocumentRepository:
        def insert_document(self, document: DocumentRow) -> DocumentRow:
            ...

    assert isinstance(PostgresDocumentRepository(), DocumentRepository)
    ```
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from taxdesk_core.models import DocumentRow, ExtractedDataRow


@runtime_checkable
class DocumentRepository(Protocol):
    """Persistence for documents, extracted fields and client tax info.

    Field rows returned by the ``get``/``list`` methods carry the joined
    ``document`` reference (filename and type) the summary builder needs.
    """

    def insert_document(self, document: DocumentRow) -> DocumentRow:
        """Persist a new document row and return it."""
        ...

    def get_document(self, document_id: str) -> Optional[DocumentRow]:
        """Fetch a document by id; None if it does not exist."""
        ...

    def list_documents(self, client_id: str, tax_year: int) -> list[DocumentRow]:
        """All of a client's documents for one tax year, in upload order."""
        ...

    def insert_extracted_fields(
        self, rows: list[ExtractedDataRow]
    ) -> list[ExtractedDataRow]:
        """Persist field rows in bulk and return them."""
        ...

    def get_extracted_field(self, field_id: str) -> Optional[ExtractedDataRow]:
        """Fetch one field row with its document joined; None if missing."""
        ...

    def update_extracted_field(self, row: ExtractedDataRow) -> ExtractedDataRow:
        """Replace a stored field row and return the stored version."""
        ...

    def list_extracted_fields(self, document_ids: list[str]) -> list[ExtractedDataRow]:
        """Field rows of the given documents, with documents joined."""
        ...

    def get_client_tax_info(self, client_id: str) -> Optional[dict[str, Any]]:
        """The client's raw tax-info blob, if the client has one."""
        ...
