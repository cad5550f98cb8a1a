"""Document and extracted-field models.

This module defines the tax document taxonomy and the two shapes a field
takes on its way through the system:

- ``ExtractedField``: the in-memory record produced by the field seeder,
  with confidence on the 0.0 to 1.0 scale.
- ``ExtractedDataRow``: the persisted ``extracted_data`` row, with
  confidence on the 0 to 100 scale and the preparer verification columns.

The two confidence scales only meet in ``to_persisted_confidence`` and
``from_persisted_confidence``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class DocumentType(str, Enum):
    """Tax document types recognized by the intake pipeline."""

    W2 = "w2"
    FORM_1099_INT = "1099_int"
    FORM_1099_DIV = "1099_div"
    FORM_1099_MISC = "1099_misc"
    FORM_1099_NEC = "1099_nec"
    FORM_1099_B = "1099_b"
    SCHEDULE_C = "schedule_c"
    RECEIPT = "receipt"
    BANK_STATEMENT = "bank_statement"
    OTHER = "other"


class ExtractionMethod(str, Enum):
    """How a field value was obtained."""

    DETERMINISTIC = "deterministic"
    OCR = "ocr"
    AI = "ai"
    MANUAL = "manual"


class DocumentStatus(str, Enum):
    """Lifecycle status of an uploaded document."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    EXTRACTED = "extracted"
    REVIEWED = "reviewed"
    COMPLETE = "complete"


def to_persisted_confidence(confidence: float) -> float:
    """Convert a 0.0-1.0 confidence to the 0-100 persisted scale."""
    return round(confidence * 100, 2)


def from_persisted_confidence(score: Optional[float]) -> Optional[float]:
    """Convert a 0-100 persisted score back to the 0.0-1.0 scale."""
    if score is None:
        return None
    return score / 100


class ClassificationResult(BaseModel):
    """Filename-based document type guess."""

    model_config = {"frozen": True}

    document_type: DocumentType = Field(
        description="Detected document type"
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="Confidence of the detection (0.0 to 1.0)",
    )

    @property
    def persisted_confidence(self) -> float:
        """Confidence on the 0-100 scale stored with the document."""
        return to_persisted_confidence(self.confidence)


class ExtractedField(BaseModel):
    """A structured field value for a document, before persistence."""

    field_name: str = Field(
        description="Snake-case field identifier, e.g. wages_tips_compensation"
    )
    field_value: Optional[str] = Field(
        default=None,
        description="Field value as entered or extracted; None when unknown",
    )
    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Confidence in the value (0.0 to 1.0)",
    )
    extraction_method: ExtractionMethod = Field(
        default=ExtractionMethod.DETERMINISTIC,
        description="How the value was obtained",
    )


class DocumentRef(BaseModel):
    """The document columns joined onto an extracted field row."""

    file_name: str = Field(description="Original uploaded filename")
    document_type: Optional[DocumentType] = Field(
        default=None,
        description="Document type, if classified",
    )


class ExtractedDataRow(BaseModel):
    """A persisted ``extracted_data`` row.

    Rows are created in bulk when a document is uploaded and later edited by
    the reviewing preparer. ``confidence_score`` uses the 0-100 scale.
    """

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "6b1c0c8e-0d55-4a43-9c55-4c1e0a9b7d10",
                    "document_id": "0f9d7a1e-6f0e-4d57-9f52-1f1f3bde2f33",
                    "field_name": "wages_tips_compensation",
                    "field_value": "85000.00",
                    "confidence_score": 100,
                    "manually_verified": True,
                    "extraction_method": "deterministic",
                    "document": {"file_name": "W2_Acme_2024.pdf", "document_type": "w2"},
                }
            ]
        }
    }

    id: str = Field(description="Row identifier")
    document_id: str = Field(description="Owning document identifier")
    field_name: str = Field(description="Snake-case field identifier")
    field_value: Optional[str] = Field(
        default=None,
        description="Current value; None until entered",
    )
    confidence_score: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Confidence on the 0-100 scale",
    )
    manually_verified: bool = Field(
        default=False,
        description="True once a preparer has confirmed the value",
    )
    verified_by: Optional[str] = Field(
        default=None,
        description="Preparer user id who verified the value",
    )
    verified_at: Optional[datetime] = Field(
        default=None,
        description="When the value was verified",
    )
    extraction_method: ExtractionMethod = Field(
        default=ExtractionMethod.DETERMINISTIC,
        description="How the value was obtained",
    )
    created_at: datetime = Field(default_factory=_utc_now)
    document: Optional[DocumentRef] = Field(
        default=None,
        description="Joined document columns, when fetched with the row",
    )

    @property
    def confidence(self) -> Optional[float]:
        """Confidence on the 0.0-1.0 scale."""
        return from_persisted_confidence(self.confidence_score)


class DocumentRow(BaseModel):
    """A persisted ``documents`` row."""

    id: str = Field(description="Document identifier")
    client_id: str = Field(description="Client user id the document belongs to")
    cpa_id: Optional[str] = Field(
        default=None,
        description="Assigned preparer user id",
    )
    file_name: str = Field(description="Original uploaded filename")
    file_url: str = Field(default="", description="Storage URL or path")
    file_size: int = Field(default=0, ge=0, description="Size in bytes")
    file_type: str = Field(default="", description="MIME type")
    document_type: Optional[DocumentType] = Field(
        default=None,
        description="Classified or user-chosen document type",
    )
    tax_year: int = Field(description="Tax year the document applies to")
    status: DocumentStatus = Field(default=DocumentStatus.UPLOADED)
    uploaded_at: datetime = Field(default_factory=_utc_now)
    confidence_score: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Classification confidence on the 0-100 scale",
    )
    requires_review: bool = Field(
        default=False,
        description="True when the type has fields a preparer must fill in",
    )
    notes: Optional[str] = None

    def as_ref(self) -> DocumentRef:
        """Return the columns joined onto field rows."""
        return DocumentRef(file_name=self.file_name, document_type=self.document_type)
