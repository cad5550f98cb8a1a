"""Document intake.

Handles a new upload end to end: pick the document type (the uploader's
choice, or a filename classification), persist the document row, then seed
and persist its placeholder field rows.
"""

from pathlib import PurePosixPath
from typing import Optional
from uuid import uuid4

import structlog

from taxdesk_core.classifier import classify_document
from taxdesk_core.exceptions import ValidationError
from taxdesk_core.field_schema import requires_data_entry
from taxdesk_core.field_seeder import seed_fields, seeded_rows
from taxdesk_core.models import (
    ClassificationResult,
    DocumentRow,
    DocumentStatus,
    DocumentType,
)

from .config import IntakeConfig
from .interfaces import DocumentRepository, IntakeResult, UploadRequest

logger = structlog.get_logger()

# Persisted confidence for a type the uploader picked
EXPLICIT_TYPE_SCORE = 100.0


class DocumentIntakeService:
    """
    Create document and field records for uploads.

    Example:
        service = DocumentIntakeService(InMemoryDocumentRepository())
        result = service.handle_upload(UploadRequest(
            client_id="c1", file_name="W2_Acme_2024.pdf", tax_year=2024,
        ))
        result.document.document_type  # DocumentType.W2
    """

    def __init__(
        self,
        repository: DocumentRepository,
        config: Optional[IntakeConfig] = None,
    ):
        self.repository = repository
        self.config = config or IntakeConfig()

    def handle_upload(self, request: UploadRequest) -> IntakeResult:
        """
        Record an uploaded document.

        Args:
            request: The upload details

        Returns:
            The stored document, its seeded field rows and the filename
            classification (None when the uploader chose the type)

        Raises:
            ValidationError: If the upload has no filename
        """
        if not request.file_name:
            raise ValidationError(
                "Upload is missing a file name",
                field="file_name",
                value=request.file_name,
                constraint="Must be a non-empty string",
            )

        document_type, confidence_score, classification = self._resolve_type(request)

        document_id = str(uuid4())
        document = self.repository.insert_document(DocumentRow(
            id=document_id,
            client_id=request.client_id,
            cpa_id=request.cpa_id,
            file_name=request.file_name,
            file_url=self._file_url(request, document_id),
            file_size=request.file_size,
            file_type=request.file_type,
            document_type=document_type,
            tax_year=request.tax_year,
            status=DocumentStatus.UPLOADED,
            confidence_score=confidence_score,
            requires_review=(
                requires_data_entry(document_type) if document_type is not None else False
            ),
            notes=request.notes or None,
        ))

        fields = []
        if self.config.seed_fields and document_type is not None:
            seeded = seed_fields(request.file_name, document_type)
            if seeded:
                fields = self.repository.insert_extracted_fields(
                    seeded_rows(document.id, seeded)
                )

        logger.info(
            "document_uploaded",
            document_id=document.id,
            client_id=request.client_id,
            tax_year=request.tax_year,
            document_type=document_type.value if document_type else None,
            confidence_score=confidence_score,
            field_count=len(fields),
        )
        return IntakeResult(document=document, fields=fields, classification=classification)

    def _resolve_type(
        self, request: UploadRequest
    ) -> tuple[Optional[DocumentType], Optional[float], Optional[ClassificationResult]]:
        """(type, persisted confidence, classification) for an upload."""
        if request.document_type is not None:
            return request.document_type, EXPLICIT_TYPE_SCORE, None

        if not self.config.auto_classify:
            return None, None, None

        classification = classify_document(request.file_name)
        return (
            classification.document_type,
            classification.persisted_confidence,
            classification,
        )

    def _file_url(self, request: UploadRequest, document_id: str) -> str:
        """Storage path: ``<bucket>/<client>/<year>/<document id><ext>``."""
        suffix = PurePosixPath(request.file_name).suffix
        return f"{self.config.storage_bucket}/{request.client_id}/{request.tax_year}/{document_id}{suffix}"
