"""Tests for filename-based document classification and name extraction."""

import pytest

from taxdesk_core.classifier import (
    DOCUMENT_PATTERNS,
    classify_document,
    confidence_level,
    describe_classification,
    document_type_label,
    document_type_options,
    extract_name_from_filename,
)
from taxdesk_core.models import ClassificationResult, DocumentType


class TestClassifyDocument:
    """Tests for classify_document."""

    @pytest.mark.parametrize(
        "filename,expected_type",
        [
            ("W-2_2024.pdf", DocumentType.W2),
            ("w2 acme.pdf", DocumentType.W2),
            ("1099-INT_Chase.pdf", DocumentType.FORM_1099_INT),
            ("1099_div.pdf", DocumentType.FORM_1099_DIV),
            ("1099MISC-rentals.pdf", DocumentType.FORM_1099_MISC),
            ("1099 nec client.pdf", DocumentType.FORM_1099_NEC),
            ("1099 b fidelity.pdf", DocumentType.FORM_1099_B),
            ("Schedule C draft.pdf", DocumentType.SCHEDULE_C),
        ],
    )
    def test_form_codes_score_high(self, filename, expected_type):
        """Filenames containing a form code classify with confidence >= 0.85."""
        result = classify_document(filename)

        assert result.document_type == expected_type
        assert result.confidence >= 0.85
        assert result.confidence == 0.95

    def test_unmatched_filename_defaults_to_other(self):
        """A filename matching no rule returns other at 0.5, not zero."""
        result = classify_document("vacation_photo.jpg")

        assert result == ClassificationResult(
            document_type=DocumentType.OTHER, confidence=0.5
        )

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert classify_document("W2_ACME.PDF").document_type == DocumentType.W2
        assert classify_document("BANK-STATEMENT.pdf").document_type == DocumentType.BANK_STATEMENT

    def test_highest_confidence_wins(self):
        """All rules are evaluated and the highest confidence match is kept."""
        # wage.*statement (0.85) and receipt (0.90) both match
        result = classify_document("wage_statement_receipt.pdf")

        assert result.document_type == DocumentType.RECEIPT
        assert result.confidence == 0.90

    def test_later_higher_rule_beats_earlier_lower_rule(self):
        """A later rule with higher confidence replaces an earlier match."""
        # invoice (0.70) comes after expense (0.75); expense must win
        result = classify_document("invoice_expense.pdf")

        assert result.document_type == DocumentType.RECEIPT
        assert result.confidence == 0.75

    def test_tie_keeps_first_rule(self):
        """Equal-confidence matches keep the earlier rule."""
        # receipt (0.90) is listed before bank[-_\s]?statement (0.90)
        result = classify_document("receipt_bank_statement.pdf")

        assert result.document_type == DocumentType.RECEIPT
        assert result.confidence == 0.90

    def test_descriptive_phrase_scores_below_form_code(self):
        """Descriptive phrases use the lower per-rule confidence."""
        result = classify_document("Interest income statement.pdf")

        assert result.document_type == DocumentType.FORM_1099_INT
        assert result.confidence == 0.85

    def test_returns_single_result(self):
        """Overlapping patterns still produce one result, never a list."""
        result = classify_document("w2_1099-int_schedule-c.pdf")

        assert isinstance(result, ClassificationResult)
        assert result.document_type == DocumentType.W2

    def test_deterministic(self):
        """The same filename always classifies the same way."""
        first = classify_document("checking_march.pdf")
        second = classify_document("checking_march.pdf")

        assert first == second
        assert first.document_type == DocumentType.BANK_STATEMENT
        assert first.confidence == 0.75

    def test_rule_confidences_in_range(self):
        """Curated confidences stay between 0.70 and 0.95."""
        for _, _, confidence in DOCUMENT_PATTERNS:
            assert 0.70 <= confidence <= 0.95

    def test_persisted_confidence(self):
        """The persisted score is the confidence on a 0-100 scale."""
        assert classify_document("W2.pdf").persisted_confidence == 95.0
        assert classify_document("notes.txt").persisted_confidence == 50.0


class TestExtractNameFromFilename:
    """Tests for extract_name_from_filename."""

    def test_concatenated_token_stays_one_word(self):
        """Only space-separated words are capitalized."""
        name = extract_name_from_filename("W2_AcmeCorp_2024.pdf", DocumentType.W2)

        assert name == "Acmecorp"

    def test_payer_name_from_1099(self):
        """Form code and year are stripped around the payer name."""
        name = extract_name_from_filename(
            "1099-DIV_Fidelity_2024.pdf", DocumentType.FORM_1099_DIV
        )

        assert name == "Fidelity"

    def test_separators_become_spaces(self):
        """Hyphens and underscores separate words."""
        name = extract_name_from_filename("W-2_acme-widgets_final.pdf", DocumentType.W2)

        assert name == "Acme Widgets"

    def test_noise_suffixes_removed(self):
        """copy/final/scan/signed/version markers are removed."""
        name = extract_name_from_filename(
            "schedule_c_JOHNS bakery copy.pdf", DocumentType.SCHEDULE_C
        )

        assert name == "Johns Bakery"

    @pytest.mark.parametrize(
        "filename",
        [
            "W2_2024.pdf",
            "1099-INT_2023_v2.pdf",
            "x.pdf",
            "W-2.pdf",
        ],
    )
    def test_too_short_returns_none(self, filename):
        """Fewer than 2 remaining characters yields None."""
        assert extract_name_from_filename(filename, DocumentType.W2) is None

    def test_years_outside_range_kept(self):
        """Only years 2020-2039 are stripped."""
        name = extract_name_from_filename("W2_Acme_2019.pdf", DocumentType.W2)

        assert name == "Acme 2019"


class TestDescriptions:
    """Tests for classification descriptions and labels."""

    def test_high_confidence_description(self):
        result = ClassificationResult(document_type=DocumentType.W2, confidence=0.95)

        assert describe_classification(result) == "W-2 Wage Statement (High confidence)"

    def test_medium_confidence_description(self):
        result = ClassificationResult(
            document_type=DocumentType.FORM_1099_INT, confidence=0.80
        )

        assert describe_classification(result) == (
            "1099-INT Interest Income (Medium confidence)"
        )

    def test_unmatched_description(self):
        result = classify_document("scan0001.jpg")

        assert describe_classification(result) == "Other Document (Low confidence)"

    @pytest.mark.parametrize(
        "confidence,level",
        [
            (0.95, "High confidence"),
            (0.90, "High confidence"),
            (0.85, "Medium confidence"),
            (0.75, "Medium confidence"),
            (0.70, "Low confidence"),
        ],
    )
    def test_confidence_level_thresholds(self, confidence, level):
        assert confidence_level(confidence) == level

    def test_document_type_labels(self):
        assert document_type_label(DocumentType.FORM_1099_NEC) == "1099-NEC"
        assert document_type_label(DocumentType.SCHEDULE_C) == "Schedule C"
        assert document_type_label(None) == "-"

    def test_document_type_options_cover_every_type(self):
        options = document_type_options()

        assert {doc_type for doc_type, _ in options} == set(DocumentType)
