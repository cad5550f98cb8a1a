"""Filename-based document classification.

Uploaded documents are classified from their filename alone; the file
content is never read. Each rule in ``DOCUMENT_PATTERNS`` pairs a
case-insensitive pattern with a document type and a fixed confidence. Every
rule is evaluated and the highest-confidence match wins. On a tie the
earlier rule is kept.

The same filename is also mined for a payer/employer name, which the field
seeder uses to pre-fill the document's entity-name field.
"""

import re
from typing import Optional

import structlog

from .models import ClassificationResult, DocumentType

logger = structlog.get_logger()


# Returned when no rule matches: unrecognized, but not impossible to review
UNMATCHED_CONFIDENCE = 0.5

# (pattern, document type, confidence). Exact form codes score higher than
# descriptive phrases.
DOCUMENT_PATTERNS: tuple[tuple[re.Pattern, DocumentType, float], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), doc_type, confidence)
    for pattern, doc_type, confidence in (
        # W-2
        (r'w[-_\s]?2', DocumentType.W2, 0.95),
        (r'wage.*statement', DocumentType.W2, 0.85),
        (r'employer.*tax', DocumentType.W2, 0.75),
        # 1099-INT
        (r'1099[-_\s]?int', DocumentType.FORM_1099_INT, 0.95),
        (r'interest.*income', DocumentType.FORM_1099_INT, 0.85),
        (r'interest.*statement', DocumentType.FORM_1099_INT, 0.80),
        # 1099-DIV
        (r'1099[-_\s]?div', DocumentType.FORM_1099_DIV, 0.95),
        (r'dividend.*statement', DocumentType.FORM_1099_DIV, 0.85),
        # 1099-MISC
        (r'1099[-_\s]?misc', DocumentType.FORM_1099_MISC, 0.95),
        (r'miscellaneous.*income', DocumentType.FORM_1099_MISC, 0.80),
        # 1099-NEC
        (r'1099[-_\s]?nec', DocumentType.FORM_1099_NEC, 0.95),
        (r'nonemployee.*compensation', DocumentType.FORM_1099_NEC, 0.85),
        (r'contractor.*payment', DocumentType.FORM_1099_NEC, 0.75),
        # 1099-B
        (r'1099[-_\s]?b\b', DocumentType.FORM_1099_B, 0.95),
        (r'broker.*statement', DocumentType.FORM_1099_B, 0.80),
        (r'stock.*sale', DocumentType.FORM_1099_B, 0.75),
        # Schedule C
        (r'schedule[-_\s]?c', DocumentType.SCHEDULE_C, 0.95),
        (r'self[-_\s]?employ', DocumentType.SCHEDULE_C, 0.80),
        (r'business.*income', DocumentType.SCHEDULE_C, 0.75),
        # Receipts
        (r'receipt', DocumentType.RECEIPT, 0.90),
        (r'expense', DocumentType.RECEIPT, 0.75),
        (r'invoice', DocumentType.RECEIPT, 0.70),
        # Bank statements
        (r'bank[-_\s]?statement', DocumentType.BANK_STATEMENT, 0.90),
        (r'account[-_\s]?statement', DocumentType.BANK_STATEMENT, 0.85),
        (r'checking|savings', DocumentType.BANK_STATEMENT, 0.75),
    )
)

# Tokens removed from a filename before reading a name out of it
_EXTENSION = re.compile(r'\.[^/.]+$')
_FORM_CODE_TOKENS = (
    re.compile(r'w[-_\s]?2', re.IGNORECASE),
    re.compile(r'1099[-_\s]?(int|div|misc|nec|b)', re.IGNORECASE),
    re.compile(r'schedule[-_\s]?c', re.IGNORECASE),
)
_YEAR = re.compile(r'20[2-3][0-9]')
_NOISE_SUFFIX = re.compile(r'[-_\s]*(copy|final|scan|signed|v\d+)', re.IGNORECASE)
_SEPARATORS = re.compile(r'[-_]+')

DOCUMENT_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.W2: "W-2",
    DocumentType.FORM_1099_MISC: "1099-MISC",
    DocumentType.FORM_1099_INT: "1099-INT",
    DocumentType.FORM_1099_DIV: "1099-DIV",
    DocumentType.FORM_1099_B: "1099-B",
    DocumentType.FORM_1099_NEC: "1099-NEC",
    DocumentType.SCHEDULE_C: "Schedule C",
    DocumentType.RECEIPT: "Receipt",
    DocumentType.BANK_STATEMENT: "Bank Statement",
    DocumentType.OTHER: "Other",
}

CLASSIFICATION_DESCRIPTIONS: dict[DocumentType, str] = {
    DocumentType.W2: "W-2 Wage Statement",
    DocumentType.FORM_1099_INT: "1099-INT Interest Income",
    DocumentType.FORM_1099_DIV: "1099-DIV Dividend Income",
    DocumentType.FORM_1099_MISC: "1099-MISC Miscellaneous Income",
    DocumentType.FORM_1099_NEC: "1099-NEC Nonemployee Compensation",
    DocumentType.FORM_1099_B: "1099-B Broker Transactions",
    DocumentType.SCHEDULE_C: "Schedule C Business Income",
    DocumentType.RECEIPT: "Receipt/Expense",
    DocumentType.BANK_STATEMENT: "Bank Statement",
    DocumentType.OTHER: "Other Document",
}


def classify_document(filename: str) -> ClassificationResult:
    """
    Classify a document from its filename.

    Args:
        filename: Name of the uploaded file

    Returns:
        The best-matching document type and its confidence. Filenames that
        match no rule come back as ``other`` with confidence 0.5.
    """
    normalized = filename.lower()

    best_type = DocumentType.OTHER
    best_confidence = 0.0

    for pattern, doc_type, confidence in DOCUMENT_PATTERNS:
        if pattern.search(normalized) and confidence > best_confidence:
            best_type = doc_type
            best_confidence = confidence

    if best_confidence == 0.0:
        result = ClassificationResult(
            document_type=DocumentType.OTHER,
            confidence=UNMATCHED_CONFIDENCE,
        )
    else:
        result = ClassificationResult(document_type=best_type, confidence=best_confidence)

    logger.debug(
        "document_classified",
        file_name=filename,
        document_type=result.document_type.value,
        confidence=result.confidence,
    )
    return result


def extract_name_from_filename(
    filename: str,
    document_type: Optional[DocumentType] = None,
) -> Optional[str]:
    """
    Guess an employer/payer/vendor name from a filename.

    Looks for names in filenames like ``W2_CompanyName_2024.pdf``: form
    codes, years 2020-2039 and noise words (copy, final, scan, signed,
    v2...) are removed and whatever is left is title-cased word by word.

    Args:
        filename: Name of the uploaded file
        document_type: Type the file was classified as. Form-code tokens of
            every type are stripped regardless.

    Returns:
        The cleaned name, or None if fewer than 2 characters remain.
    """
    cleaned = _EXTENSION.sub('', filename)

    for token in _FORM_CODE_TOKENS:
        cleaned = token.sub('', cleaned)

    cleaned = _YEAR.sub('', cleaned)
    cleaned = _NOISE_SUFFIX.sub('', cleaned)
    cleaned = _SEPARATORS.sub(' ', cleaned).strip()

    if len(cleaned) < 2:
        return None

    return ' '.join(
        word[0].upper() + word[1:].lower()
        for word in cleaned.split(' ')
        if word
    )


def confidence_level(confidence: float) -> str:
    """Bucket a confidence into High / Medium / Low."""
    if confidence >= 0.9:
        return "High confidence"
    if confidence >= 0.75:
        return "Medium confidence"
    return "Low confidence"


def describe_classification(result: ClassificationResult) -> str:
    """Human-readable description, e.g. ``W-2 Wage Statement (High confidence)``."""
    label = CLASSIFICATION_DESCRIPTIONS[result.document_type]
    return f"{label} ({confidence_level(result.confidence)})"


def document_type_label(document_type: Optional[DocumentType]) -> str:
    """Short display label for a document type; ``-`` when unset."""
    if document_type is None:
        return "-"
    return DOCUMENT_TYPE_LABELS[document_type]


def document_type_options() -> list[tuple[DocumentType, str]]:
    """(type, label) pairs for a document type picker."""
    return list(DOCUMENT_TYPE_LABELS.items())
