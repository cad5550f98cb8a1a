#!/usr/bin/env python3
"""
Tax Preparation Workflow Demonstration

This script walks one client's tax year through the portal:
1. Upload documents (classified from their filenames, fields seeded)
2. Preparer enters and verifies field values
3. Build the year-end summary and export it

Run: python examples/tax_prep_demo.py
"""

from taxdesk_core import describe_classification, format_currency
from taxdesk_portal import (
    DocumentIntakeService,
    FieldReviewService,
    InMemoryDocumentRepository,
    TaxPrepWorkspace,
)
from taxdesk_portal.interfaces import UploadRequest

CLIENT_ID = "client-001"
TAX_YEAR = 2024

UPLOADS = [
    "W2_AcmeCorp_2024.pdf",
    "1099-DIV_Fidelity_2024.pdf",
    "1099-B Schwab 2024.pdf",
    "vacation_photo.jpg",
]

# field name -> value a preparer types in, per uploaded filename
ENTRIES = {
    "W2_AcmeCorp_2024.pdf": {
        "employer_name": "Acme Corporation",
        "wages_tips_compensation": "85,000.00",
        "federal_tax_withheld": "9,200.00",
        "social_security_tax": "5,270.00",
        "medicare_tax": "1,232.50",
        "state_tax_withheld": "4,100.00",
    },
    "1099-DIV_Fidelity_2024.pdf": {
        "ordinary_dividends": "1,340.12",
        "qualified_dividends": "980.00",
    },
    "1099-B Schwab 2024.pdf": {
        "proceeds": "12,000.00",
        "gain_loss": "1,875.40",
    },
}

CLIENT_TAX_INFO = {
    "income_sources": [
        {"id": "1", "type": "rental", "source_name": "Garden apartment", "amount": "14400"},
    ],
    "deductions": [
        {"id": "1", "category": "charitable", "description": "Food bank", "amount": "750"},
        {"id": "2", "category": "student_loan", "description": "", "amount": "2500"},
    ],
    "dependents": [
        {"name": "Emily Smith", "relationship": "daughter", "date_of_birth": "2012-04-09"},
    ],
}


def main():
    """Run the tax preparation demonstration."""
    print("=" * 70)
    print("TAXDESK - Tax Preparation Demo")
    print("=" * 70)
    print()

    repository = InMemoryDocumentRepository()
    repository.set_client_tax_info(CLIENT_ID, CLIENT_TAX_INFO)

    # Step 1: Upload documents
    print("Step 1: Uploading documents...")
    intake = DocumentIntakeService(repository)
    uploaded = {}
    for file_name in UPLOADS:
        result = intake.handle_upload(UploadRequest(
            client_id=CLIENT_ID,
            cpa_id="cpa-001",
            file_name=file_name,
            tax_year=TAX_YEAR,
        ))
        uploaded[file_name] = result
        print(f"  - {file_name}: {describe_classification(result.classification)}, "
              f"{len(result.fields)} fields")
    print()

    # Step 2: Preparer review
    print("Step 2: Entering and verifying field values...")
    review = FieldReviewService(repository)
    for file_name, values in ENTRIES.items():
        for field in uploaded[file_name].fields:
            if field.field_name in values:
                review.verify_field(field.id, values[field.field_name], verified_by="cpa-001")
        pending = review.pending_fields(uploaded[file_name].document.id)
        print(f"  - {file_name}: {len(values)} verified, {len(pending)} still blank")
    print()

    # Step 3: Summary and export
    print("Step 3: Building the tax summary...")
    workspace = TaxPrepWorkspace(repository)
    view = workspace.build_summary(CLIENT_ID, TAX_YEAR, client_name="John Smith")
    print(f"  - Documents: {view.document_count}")
    print(f"  - Total Income: {format_currency(view.summary.total_income)}")
    print(f"  - Federal Withheld: {format_currency(view.summary.total_federal_withheld)}")
    print()

    filename, content = workspace.export(
        CLIENT_ID, "John Smith", "john.smith@example.com", TAX_YEAR
    )
    print(content)

    print()
    print("-" * 70)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(content)
    print(f"  - Saved: {filename}")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
