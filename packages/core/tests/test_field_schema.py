"""Tests for the per-type field schema."""

import pytest

from taxdesk_core.field_schema import (
    DOCUMENT_FIELD_DEFINITIONS,
    ENTITY_NAME_FIELDS,
    entity_name_field,
    expected_fields,
    field_label,
    requires_data_entry,
)
from taxdesk_core.models import DocumentType


class TestExpectedFields:
    """Tests for expected_fields and requires_data_entry."""

    def test_w2_fields_in_order(self):
        fields = expected_fields(DocumentType.W2)

        assert fields[0] == "employer_name"
        assert fields[2] == "wages_tips_compensation"
        assert fields[-1] == "state_tax_withheld"
        assert len(fields) == 11

    def test_1099_b_has_gross_and_net(self):
        fields = expected_fields(DocumentType.FORM_1099_B)

        assert "proceeds" in fields
        assert "gain_loss" in fields

    def test_other_has_no_fields(self):
        assert expected_fields(DocumentType.OTHER) == []

    def test_returns_copy(self):
        """Callers can mutate the result without touching the schema."""
        fields = expected_fields(DocumentType.RECEIPT)
        fields.append("extra")

        assert "extra" not in expected_fields(DocumentType.RECEIPT)

    @pytest.mark.parametrize(
        "doc_type",
        [t for t in DocumentType if t != DocumentType.OTHER],
    )
    def test_every_type_but_other_requires_entry(self, doc_type):
        assert requires_data_entry(doc_type) is True

    def test_other_requires_no_entry(self):
        assert requires_data_entry(DocumentType.OTHER) is False

    def test_field_names_unique_within_type(self):
        for fields in DOCUMENT_FIELD_DEFINITIONS.values():
            assert len(fields) == len(set(fields))

    def test_shared_field_names(self):
        """Withholding uses one field name across income forms."""
        for doc_type in (
            DocumentType.W2,
            DocumentType.FORM_1099_INT,
            DocumentType.FORM_1099_DIV,
            DocumentType.FORM_1099_MISC,
            DocumentType.FORM_1099_NEC,
        ):
            assert "federal_tax_withheld" in expected_fields(doc_type)


class TestEntityNameField:
    """Tests for entity_name_field."""

    @pytest.mark.parametrize(
        "doc_type,expected",
        [
            (DocumentType.W2, "employer_name"),
            (DocumentType.FORM_1099_INT, "payer_name"),
            (DocumentType.FORM_1099_B, "broker_name"),
            (DocumentType.SCHEDULE_C, "business_name"),
            (DocumentType.RECEIPT, "vendor_name"),
            (DocumentType.BANK_STATEMENT, "bank_name"),
            (DocumentType.OTHER, None),
        ],
    )
    def test_entity_field_per_type(self, doc_type, expected):
        assert entity_name_field(doc_type) == expected

    def test_each_type_has_at_most_one_entity_field(self):
        for fields in DOCUMENT_FIELD_DEFINITIONS.values():
            assert sum(1 for f in fields if f in ENTITY_NAME_FIELDS) <= 1


class TestFieldLabel:
    """Tests for field_label."""

    def test_curated_labels(self):
        assert field_label("wages_tips_compensation") == "Wages (Box 1)"
        assert field_label("gain_loss") == "Gain/Loss"
        assert field_label("expense_category") == "Category"

    def test_unknown_field_title_cased(self):
        assert field_label("foreign_tax_paid") == "Foreign Tax Paid"

    def test_every_schema_field_has_a_label(self):
        for fields in DOCUMENT_FIELD_DEFINITIONS.values():
            for field_name in fields:
                assert field_label(field_name) != field_name
