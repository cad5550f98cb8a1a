"""Request and result types for the portal services."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from taxdesk_core.models import (
    ClassificationResult,
    DocumentRow,
    DocumentType,
    ExtractedDataRow,
    TaxSummary,
)


class UploadRequest(BaseModel):
    """A file upload as received from the client or preparer."""

    client_id: str = Field(description="Client the document belongs to")
    cpa_id: Optional[str] = Field(
        default=None,
        description="Assigned preparer, if any",
    )
    file_name: str = Field(description="Original filename")
    file_size: int = Field(default=0, ge=0, description="Size in bytes")
    file_type: str = Field(default="", description="MIME type")
    tax_year: int = Field(description="Tax year the document applies to")
    document_type: Optional[DocumentType] = Field(
        default=None,
        description="Type chosen by the uploader; skips classification",
    )
    notes: Optional[str] = None

    @field_validator("file_name")
    @classmethod
    def strip_file_name(cls, v: str) -> str:
        """Drop surrounding whitespace."""
        return v.strip()


class IntakeResult(BaseModel):
    """What an upload produced."""

    document: DocumentRow
    fields: list[ExtractedDataRow] = Field(default_factory=list)
    classification: Optional[ClassificationResult] = Field(
        default=None,
        description="Filename classification; None when the type was given",
    )


class ClientSummaryView(BaseModel):
    """A built summary with the client details shown above it."""

    client_id: str
    client_name: str
    client_email: Optional[str] = None
    tax_year: int
    document_count: int = Field(default=0, ge=0)
    summary: TaxSummary
