"""Preparer review of extracted fields."""

from datetime import datetime, timezone
from typing import Optional

import structlog

from taxdesk_core.exceptions import RecordNotFoundError
from taxdesk_core.models import ExtractedDataRow

from .interfaces import DocumentRepository

logger = structlog.get_logger()

# A preparer-confirmed value is certain
VERIFIED_SCORE = 100.0


class FieldReviewService:
    """Record preparer edits and confirmations of field values."""

    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    def verify_field(
        self,
        field_id: str,
        value: Optional[str],
        verified_by: str,
        at: Optional[datetime] = None,
    ) -> ExtractedDataRow:
        """
        Save a preparer-confirmed value for a field.

        The extraction method is left as it was; only the value and the
        verification columns change.

        Args:
            field_id: The field row to update
            value: The confirmed value
            verified_by: Preparer user id
            at: Verification time (default: now, UTC)

        Returns:
            The updated row

        Raises:
            RecordNotFoundError: If the field row does not exist
        """
        row = self.repository.get_extracted_field(field_id)
        if row is None:
            raise RecordNotFoundError(
                f"Extracted field {field_id} not found",
                record_type="extracted_data",
                record_id=field_id,
            )

        updated = self.repository.update_extracted_field(row.model_copy(update={
            "field_value": value,
            "manually_verified": True,
            "confidence_score": VERIFIED_SCORE,
            "verified_by": verified_by,
            "verified_at": at or datetime.now(timezone.utc),
        }))

        logger.info(
            "field_verified",
            field_id=field_id,
            document_id=row.document_id,
            field_name=row.field_name,
            verified_by=verified_by,
        )
        return updated

    def pending_fields(self, document_id: str) -> list[ExtractedDataRow]:
        """Fields of a document a preparer has not verified yet."""
        return [
            row
            for row in self.repository.list_extracted_fields([document_id])
            if not row.manually_verified
        ]
