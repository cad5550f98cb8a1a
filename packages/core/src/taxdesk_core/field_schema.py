"""Expected structured fields per document type.

Each document type that needs preparer data entry has an ordered list of
field names. Field names are shared across types where they mean the same
thing (``federal_tax_withheld`` appears on the W-2 and the 1099 income
forms), which lets the summary builder route them with a single table.
"""

import re
from typing import Optional

from .models import DocumentType


DOCUMENT_FIELD_DEFINITIONS: dict[DocumentType, tuple[str, ...]] = {
    DocumentType.W2: (
        'employer_name',
        'employer_ein',
        'wages_tips_compensation',
        'federal_tax_withheld',
        'social_security_wages',
        'social_security_tax',
        'medicare_wages',
        'medicare_tax',
        'state',
        'state_wages',
        'state_tax_withheld',
    ),
    DocumentType.FORM_1099_INT: (
        'payer_name',
        'payer_tin',
        'interest_income',
        'early_withdrawal_penalty',
        'federal_tax_withheld',
    ),
    DocumentType.FORM_1099_DIV: (
        'payer_name',
        'payer_tin',
        'ordinary_dividends',
        'qualified_dividends',
        'capital_gain_distributions',
        'federal_tax_withheld',
    ),
    DocumentType.FORM_1099_MISC: (
        'payer_name',
        'payer_tin',
        'rents',
        'royalties',
        'other_income',
        'federal_tax_withheld',
    ),
    DocumentType.FORM_1099_NEC: (
        'payer_name',
        'payer_tin',
        'nonemployee_compensation',
        'federal_tax_withheld',
    ),
    DocumentType.FORM_1099_B: (
        'broker_name',
        'broker_tin',
        'proceeds',
        'cost_basis',
        'gain_loss',
        'wash_sale_loss',
    ),
    DocumentType.SCHEDULE_C: (
        'business_name',
        'business_ein',
        'gross_receipts',
        'total_expenses',
        'net_profit_loss',
    ),
    DocumentType.RECEIPT: (
        'vendor_name',
        'expense_category',
        'amount',
        'date',
    ),
    DocumentType.BANK_STATEMENT: (
        'bank_name',
        'account_type',
        'statement_period',
        'ending_balance',
    ),
    DocumentType.OTHER: (),
}

# Fields that hold the employer/payer/broker/vendor/bank/business name
ENTITY_NAME_FIELDS: tuple[str, ...] = (
    'employer_name',
    'payer_name',
    'broker_name',
    'business_name',
    'vendor_name',
    'bank_name',
)

FIELD_LABELS: dict[str, str] = {
    'employer_name': 'Employer Name',
    'employer_ein': 'Employer EIN',
    'wages_tips_compensation': 'Wages (Box 1)',
    'federal_tax_withheld': 'Federal Tax Withheld',
    'social_security_wages': 'Social Security Wages',
    'social_security_tax': 'Social Security Tax',
    'medicare_wages': 'Medicare Wages',
    'medicare_tax': 'Medicare Tax',
    'state': 'State',
    'state_wages': 'State Wages',
    'state_tax_withheld': 'State Tax Withheld',
    'payer_name': 'Payer Name',
    'payer_tin': 'Payer TIN',
    'interest_income': 'Interest Income (Box 1)',
    'early_withdrawal_penalty': 'Early Withdrawal Penalty',
    'ordinary_dividends': 'Ordinary Dividends (Box 1a)',
    'qualified_dividends': 'Qualified Dividends (Box 1b)',
    'capital_gain_distributions': 'Capital Gain Distributions',
    'rents': 'Rents',
    'royalties': 'Royalties',
    'other_income': 'Other Income',
    'nonemployee_compensation': 'Nonemployee Compensation (Box 1)',
    'broker_name': 'Broker Name',
    'broker_tin': 'Broker TIN',
    'proceeds': 'Proceeds',
    'cost_basis': 'Cost Basis',
    'gain_loss': 'Gain/Loss',
    'wash_sale_loss': 'Wash Sale Loss',
    'business_name': 'Business Name',
    'business_ein': 'Business EIN',
    'gross_receipts': 'Gross Receipts',
    'total_expenses': 'Total Expenses',
    'net_profit_loss': 'Net Profit/Loss',
    'vendor_name': 'Vendor Name',
    'expense_category': 'Category',
    'amount': 'Amount',
    'date': 'Date',
    'bank_name': 'Bank Name',
    'account_type': 'Account Type',
    'statement_period': 'Statement Period',
    'ending_balance': 'Ending Balance',
}


def expected_fields(document_type: DocumentType) -> list[str]:
    """Ordered field names a document of this type should have."""
    return list(DOCUMENT_FIELD_DEFINITIONS.get(document_type, ()))


def requires_data_entry(document_type: DocumentType) -> bool:
    """True when the type has fields a preparer needs to fill in."""
    return len(DOCUMENT_FIELD_DEFINITIONS.get(document_type, ())) > 0


def entity_name_field(document_type: DocumentType) -> Optional[str]:
    """The field holding the payer/employer/vendor name for this type, if any."""
    for field_name in DOCUMENT_FIELD_DEFINITIONS.get(document_type, ()):
        if field_name in ENTITY_NAME_FIELDS:
            return field_name
    return None


def field_label(field_name: str) -> str:
    """Human-readable label; unknown names become Title Case."""
    if field_name in FIELD_LABELS:
        return FIELD_LABELS[field_name]
    return re.sub(r'\b\w', lambda m: m.group().upper(), field_name.replace('_', ' '))
