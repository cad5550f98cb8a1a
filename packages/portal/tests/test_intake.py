"""Tests for the document intake service."""

import pytest

from taxdesk_core.exceptions import TaxDeskError, ValidationError
from taxdesk_core.models import DocumentStatus, DocumentType
from taxdesk_portal.config import IntakeConfig
from taxdesk_portal.intake import DocumentIntakeService
from taxdesk_portal.interfaces import UploadRequest


def upload(file_name: str, **kwargs) -> UploadRequest:
    return UploadRequest(client_id="client-1", file_name=file_name, tax_year=2024, **kwargs)


class TestClassifiedUpload:
    """Uploads without an explicit type are classified from the filename."""

    def test_w2_upload(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(upload("W2_Acme_2024.pdf", cpa_id="cpa-1"))
        doc = result.document

        assert doc.document_type == DocumentType.W2
        assert doc.confidence_score == 95.0
        assert doc.requires_review is True
        assert doc.status == DocumentStatus.UPLOADED
        assert doc.cpa_id == "cpa-1"
        assert result.classification.confidence == 0.95

    def test_fields_seeded_and_persisted(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(upload("W2_Acme_2024.pdf"))

        assert len(result.fields) == 11
        assert result.fields[0].field_name == "employer_name"
        assert result.fields[0].field_value == "Acme"
        assert result.fields[0].confidence_score == 60.0

        stored = repository.list_extracted_fields([result.document.id])
        assert [r.id for r in stored] == [r.id for r in result.fields]
        assert stored[0].document.file_name == "W2_Acme_2024.pdf"

    def test_unrecognized_upload(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(upload("IMG_0042.jpg"))

        assert result.document.document_type == DocumentType.OTHER
        assert result.document.confidence_score == 50.0
        assert result.document.requires_review is False
        assert result.fields == []

    def test_document_stored(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(upload("1099-INT_Chase.pdf", file_size=2048,
                                              file_type="application/pdf"))

        stored = repository.get_document(result.document.id)
        assert stored == result.document
        assert stored.file_size == 2048
        assert stored.file_type == "application/pdf"

    def test_file_url(self, repository):
        service = DocumentIntakeService(repository, IntakeConfig(storage_bucket="uploads"))

        result = service.handle_upload(upload("W2_Acme_2024.pdf"))

        assert result.document.file_url == f"uploads/client-1/2024/{result.document.id}.pdf"


class TestExplicitType:
    """Uploads with a type chosen by the uploader."""

    def test_explicit_type_skips_classification(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(
            upload("scan.pdf", document_type=DocumentType.FORM_1099_NEC)
        )

        assert result.classification is None
        assert result.document.document_type == DocumentType.FORM_1099_NEC
        assert result.document.confidence_score == 100.0
        assert [f.field_name for f in result.fields] == [
            "payer_name", "payer_tin", "nonemployee_compensation", "federal_tax_withheld",
        ]

    def test_explicit_other(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(upload("W2.pdf", document_type=DocumentType.OTHER))

        assert result.document.document_type == DocumentType.OTHER
        assert result.document.requires_review is False
        assert result.fields == []


class TestIntakeSettings:
    """Intake behavior controlled by IntakeConfig."""

    def test_auto_classify_disabled(self, repository):
        service = DocumentIntakeService(repository, IntakeConfig(auto_classify=False))

        result = service.handle_upload(upload("W2_Acme_2024.pdf"))

        assert result.document.document_type is None
        assert result.document.confidence_score is None
        assert result.document.requires_review is False
        assert result.classification is None
        assert result.fields == []

    def test_seeding_disabled(self, repository):
        service = DocumentIntakeService(repository, IntakeConfig(seed_fields=False))

        result = service.handle_upload(upload("W2_Acme_2024.pdf"))

        assert result.document.document_type == DocumentType.W2
        assert result.document.requires_review is True
        assert result.fields == []
        assert repository.list_extracted_fields([result.document.id]) == []


class TestValidation:
    """Uploads the service rejects."""

    @pytest.mark.parametrize("file_name", ["", "   "])
    def test_empty_file_name(self, repository, file_name):
        service = DocumentIntakeService(repository)

        with pytest.raises(ValidationError) as exc_info:
            service.handle_upload(upload(file_name))

        assert exc_info.value.field == "file_name"
        assert str(exc_info.value) == "Upload is missing a file name"
        assert isinstance(exc_info.value, TaxDeskError)
        assert repository.list_documents("client-1", 2024) == []

    def test_blank_notes_stored_as_none(self, repository):
        service = DocumentIntakeService(repository)

        result = service.handle_upload(upload("W2.pdf", notes=""))

        assert result.document.notes is None
