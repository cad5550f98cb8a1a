"""Tax summary and client self-reported data models.

The summary models are ephemeral: a ``TaxSummary`` is rebuilt from the
extracted field rows and the client's tax-info record on every request and
never persisted. Totals are computed fields, so a summary's totals always
equal the sums of its line items.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, field_validator


CLIENT_REPORTED_SOURCE = "Client-reported"


def sum_items(items: list["TaxLineItem"]) -> Decimal:
    """Sum the amounts of a list of line items."""
    return sum((item.amount for item in items), Decimal("0"))


class TaxLineItem(BaseModel):
    """One amount in a summary bucket, traced back to where it came from."""

    label: str = Field(description="Field label or client-entered description")
    amount: Decimal = Field(description="Amount in dollars")
    source: str = Field(
        description="Payer/employer name, filename, or 'Client-reported'"
    )
    verified: bool = Field(
        default=False,
        description="True when a preparer verified the underlying field",
    )
    document_id: Optional[str] = Field(default=None)
    field_id: Optional[str] = Field(default=None)


class SummaryDependent(BaseModel):
    """A dependent as shown on the summary."""

    name: str
    relationship: str
    dob: str


class TaxSummary(BaseModel):
    """Categorized, deduplicated rollup for one client and tax year."""

    # Income
    wages_income: list[TaxLineItem] = Field(default_factory=list)
    interest_income: list[TaxLineItem] = Field(default_factory=list)
    dividend_income: list[TaxLineItem] = Field(default_factory=list)
    business_income: list[TaxLineItem] = Field(default_factory=list)
    capital_gains: list[TaxLineItem] = Field(default_factory=list)
    other_income: list[TaxLineItem] = Field(default_factory=list)

    # Withholdings
    federal_withheld: list[TaxLineItem] = Field(default_factory=list)
    state_withheld: list[TaxLineItem] = Field(default_factory=list)
    social_security_tax: list[TaxLineItem] = Field(default_factory=list)
    medicare_tax: list[TaxLineItem] = Field(default_factory=list)

    # Client-reported
    client_deductions: list[TaxLineItem] = Field(default_factory=list)
    dependents: list[SummaryDependent] = Field(default_factory=list)

    @property
    def income_buckets(self) -> dict[str, list[TaxLineItem]]:
        """The six income buckets keyed by attribute name, in report order."""
        return {
            "wages_income": self.wages_income,
            "interest_income": self.interest_income,
            "dividend_income": self.dividend_income,
            "business_income": self.business_income,
            "capital_gains": self.capital_gains,
            "other_income": self.other_income,
        }

    @computed_field
    @property
    def total_income(self) -> Decimal:
        """Sum of all six income buckets."""
        return sum(
            (sum_items(items) for items in self.income_buckets.values()),
            Decimal("0"),
        )

    @computed_field
    @property
    def total_federal_withheld(self) -> Decimal:
        """Sum of federal withholding items."""
        return sum_items(self.federal_withheld)

    @computed_field
    @property
    def total_state_withheld(self) -> Decimal:
        """Sum of state withholding items."""
        return sum_items(self.state_withheld)

    @computed_field
    @property
    def total_client_deductions(self) -> Decimal:
        """Sum of client-reported deductions."""
        return sum_items(self.client_deductions)


def _entries(v: Any) -> list:
    """Keep only the dict (or model) entries of a list; anything else is empty."""
    if not isinstance(v, list):
        return []
    return [entry for entry in v if isinstance(entry, (dict, BaseModel))]


def _to_text(v: Any) -> str:
    if isinstance(v, str):
        return v
    if isinstance(v, bool):
        return ""
    if isinstance(v, (int, float, Decimal)):
        return str(v)
    return ""


class ClientIncomeSource(BaseModel):
    """An income source the client entered on the tax-info form."""

    model_config = {"extra": "ignore"}

    id: Optional[str] = None
    type: str = Field(default="", description="Income type key, e.g. w2_wages")
    source_name: str = Field(default="", description="Payer or employer name")
    amount: str = Field(default="", description="Amount as typed by the client")
    has_document: bool = Field(
        default=False,
        description="Client says a supporting document was uploaded",
    )

    @field_validator("id", "type", "source_name", "amount", mode="before")
    @classmethod
    def coerce_text(cls, v):
        """Keep values as the strings the client typed; null becomes empty."""
        return _to_text(v)

    @field_validator("has_document", mode="before")
    @classmethod
    def coerce_flag(cls, v):
        return v if isinstance(v, bool) else False


class ClientDeduction(BaseModel):
    """A deduction the client entered on the tax-info form."""

    model_config = {"extra": "ignore"}

    id: Optional[str] = None
    category: str = Field(default="", description="Deduction category key")
    description: str = Field(default="")
    amount: str = Field(default="", description="Amount as typed by the client")

    @field_validator("id", "category", "description", "amount", mode="before")
    @classmethod
    def coerce_text(cls, v):
        """Keep values as the strings the client typed; null becomes empty."""
        return _to_text(v)


class ClientDependent(BaseModel):
    """A dependent the client entered on the tax-info form."""

    model_config = {"extra": "ignore"}

    name: str = ""
    relationship: str = ""
    date_of_birth: str = ""
    ssn_last4: Optional[str] = None
    months_lived: Optional[str] = None

    @field_validator("name", "relationship", "date_of_birth", mode="before")
    @classmethod
    def coerce_text(cls, v):
        """Null becomes empty."""
        return _to_text(v)

    @field_validator("ssn_last4", "months_lived", mode="before")
    @classmethod
    def coerce_optional_text(cls, v):
        """Numbers become strings; null stays null."""
        return None if v is None else _to_text(v)


class ClientTaxInfo(BaseModel):
    """Self-reported income, deductions and dependents for the active tax year.

    Stored on the client profile as a loosely structured blob, so parsing
    never fails on its shape. Missing, null or non-list lists become empty
    lists and entries that are not objects are dropped. Numeric text values
    become strings; other odd values (booleans, nested objects) become
    empty strings, which leaves their amounts unparseable. Unknown keys are
    ignored.
    """

    model_config = {"extra": "ignore"}

    income_sources: list[ClientIncomeSource] = Field(default_factory=list)
    deductions: list[ClientDeduction] = Field(default_factory=list)
    dependents: list[ClientDependent] = Field(default_factory=list)

    @field_validator("income_sources", "deductions", "dependents", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return _entries(v)

    @classmethod
    def from_blob(cls, blob: Optional[dict[str, Any]]) -> Optional["ClientTaxInfo"]:
        """Build from the profile's ``tax_info`` column; None stays None."""
        if blob is None:
            return None
        if not isinstance(blob, dict):
            return cls()
        return cls.model_validate(blob)
