"""Initial field records for newly uploaded documents.

When a document is uploaded, one placeholder field is created per expected
field of its type so the preparer has a form to fill in. The only value
known up front is a name guessed from the filename, which pre-fills the
type's entity-name field at a deliberately low confidence.
"""

from uuid import uuid4

import structlog

from .classifier import extract_name_from_filename
from .field_schema import ENTITY_NAME_FIELDS, expected_fields
from .models import (
    DocumentType,
    ExtractedDataRow,
    ExtractedField,
    ExtractionMethod,
    to_persisted_confidence,
)

logger = structlog.get_logger()

# Names read from a filename are a guess, well below a verified value (1.0)
FILENAME_NAME_CONFIDENCE = 0.6


def seed_fields(filename: str, document_type: DocumentType) -> list[ExtractedField]:
    """
    Create initial field records for a document.

    Args:
        filename: Name of the uploaded file
        document_type: Classified or user-chosen document type

    Returns:
        One field per expected field of the type, in schema order. Empty for
        types with no schema (``other``).
    """
    field_names = expected_fields(document_type)
    if not field_names:
        return []

    extracted_name = extract_name_from_filename(filename, document_type)

    fields = []
    for field_name in field_names:
        if extracted_name and field_name in ENTITY_NAME_FIELDS:
            fields.append(ExtractedField(
                field_name=field_name,
                field_value=extracted_name,
                confidence=FILENAME_NAME_CONFIDENCE,
                extraction_method=ExtractionMethod.DETERMINISTIC,
            ))
        else:
            fields.append(ExtractedField(
                field_name=field_name,
                field_value=None,
                confidence=0.0,
                extraction_method=ExtractionMethod.DETERMINISTIC,
            ))

    logger.debug(
        "fields_seeded",
        file_name=filename,
        document_type=document_type.value,
        field_count=len(fields),
        prefilled_name=extracted_name,
    )
    return fields


def seeded_rows(document_id: str, fields: list[ExtractedField]) -> list[ExtractedDataRow]:
    """Convert seeded fields into ``extracted_data`` rows for a document."""
    return [
        ExtractedDataRow(
            id=str(uuid4()),
            document_id=document_id,
            field_name=f.field_name,
            field_value=f.field_value,
            confidence_score=to_persisted_confidence(f.confidence),
            manually_verified=False,
            extraction_method=f.extraction_method,
        )
        for f in fields
    ]
