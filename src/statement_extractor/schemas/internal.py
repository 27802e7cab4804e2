"""Internal data schemas for extracted statement data.

These models represent the structured output of the extraction engine
before any persistence or display concerns. Every record field is
optional: ``None`` is the only representation of "not present".
"""

from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer, model_validator


class ProviderIdentity(str, Enum):
    """Closed set of statement issuers recognised by the detector."""

    HDFC = "hdfc"
    SBI = "sbi"
    ICICI = "icici"
    AXIS = "axis"
    KOTAK = "kotak"
    UNKNOWN = "unknown"


class DateValue(BaseModel):
    """A day/month/year triple exactly as read from the statement.

    The triple is not calendar-validated when parsed ("31/13/2024" is kept
    as-is). ``to_date()`` turns it into a real date by rolling overflowing
    months and days forward, the same way the statement text would be read
    by a lenient date library.

    JSON output is the rolled date, so "31/13/2024" is serialised as
    "2025-01-31" and "31/04/2024" as "2024-05-01". Callers needing the
    printed triple should read ``year``, ``month`` and ``day``.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int

    @model_validator(mode="before")
    @classmethod
    def parse_isoformat(cls, data: Any) -> Any:
        """Accept the serialised "YYYY-MM-DD" form back."""
        if isinstance(data, str):
            year, month, day = (int(part) for part in data.split("-"))
            return {"year": year, "month": month, "day": day}
        return data

    @classmethod
    def from_date(cls, value: date) -> "DateValue":
        """Create from a calendar date."""
        return cls(year=value.year, month=value.month, day=value.day)

    def to_date(self) -> date:
        """Convert to a calendar date, rolling overflow forward.

        Raises:
            ValueError: If the rolled-over date is outside the supported range
        """
        year = self.year + (self.month - 1) // 12
        month = (self.month - 1) % 12 + 1
        try:
            return date(year, month, 1) + timedelta(days=self.day - 1)
        except OverflowError as e:
            raise ValueError(f"Date out of range: {self.year}-{self.month}-{self.day}") from e

    def isoformat(self) -> str:
        try:
            return self.to_date().isoformat()
        except ValueError:
            return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @model_serializer
    def _serialize(self) -> str:
        return self.isoformat()


class MoneyValue(BaseModel):
    """Non-negative amount with an informational debit marker.

    ``is_debit`` records a "Dr" suffix on the source text; it never flips
    the sign of ``amount``.
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., ge=0, description="Magnitude with two fractional digits")
    is_debit: bool = Field(default=False, description="Source amount carried a debit marker")

    @field_validator("amount")
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        """Keep exactly two fractional digits."""
        return v.quantize(Decimal("0.01"))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


class Candidate(NamedTuple):
    """One extraction attempt for a field during disambiguation."""

    raw: str
    position: int
    value: Any | None


ROLLED_DATE_NOTE = "ISO date; impossible day or month values are rolled forward"


class ExtractionRecord(BaseModel):
    """Fields extracted from a single statement.

    Created once per extraction call and immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    account_holder_name: str | None = Field(None, description="Card holder name")
    card_last4: str | None = Field(None, description="Last 4 digits of the card number")
    card_variant: str | None = Field(None, description="Card product label")
    billing_cycle_start: DateValue | None = Field(
        None, description=f"Billing cycle start ({ROLLED_DATE_NOTE})"
    )
    billing_cycle_end: DateValue | None = Field(
        None, description=f"Billing cycle end ({ROLLED_DATE_NOTE})"
    )
    payment_due_date: DateValue | None = Field(
        None, description=f"Payment due date ({ROLLED_DATE_NOTE})"
    )
    total_balance: MoneyValue | None = Field(None, description="Total amount due")
    minimum_due: MoneyValue | None = Field(None, description="Minimum amount due")

    @field_validator("card_last4")
    @classmethod
    def validate_last4(cls, v: str | None) -> str | None:
        """Ensure the card number fragment is exactly four digits."""
        if v is None:
            return v
        if len(v) != 4 or not (v.isascii() and v.isdigit()):
            raise ValueError("Card last 4 must be exactly four digits")
        return v

    @model_validator(mode="after")
    def validate_cycle_order(self) -> "ExtractionRecord":
        """Billing cycle start must not be after its end."""
        start, end = self.billing_cycle_start, self.billing_cycle_end
        if start is not None and end is not None and start.to_date() > end.to_date():
            raise ValueError("Billing cycle start must not be after billing cycle end")
        return self

    def missing_fields(self) -> list[str]:
        """Names of fields that were not extracted."""
        return [name for name, value in self if value is None]


class RejectedCandidate(BaseModel):
    """A candidate that lost disambiguation or failed validation."""

    field: str
    raw: str
    position: int
    reason: str


class ExtractionDiagnostics(BaseModel):
    """Optional troubleshooting companion to an ExtractionRecord.

    Only populated when explicitly requested; extraction never depends on it.
    """

    tiers: dict[str, str] = Field(default_factory=dict, description="Field -> rule that matched")
    rejected: list[RejectedCandidate] = Field(default_factory=list)
    billing_cycle_source: str | None = Field(
        None, description="'explicit', 'statement_date' or 'transaction_dates'"
    )

    def record_tier(self, field: str, rule: str) -> None:
        self.tiers[field] = rule

    def reject(self, field: str, candidate: Candidate, reason: str) -> None:
        self.rejected.append(
            RejectedCandidate(
                field=field,
                raw=candidate.raw,
                position=candidate.position,
                reason=reason,
            )
        )


class ExtractionResult(BaseModel):
    """Record plus the resolved provider, returned by the orchestrator."""

    provider: ProviderIdentity
    provider_name: str
    record: ExtractionRecord
    diagnostics: ExtractionDiagnostics | None = None


class ExtractionFailure(BaseModel):
    """Structured failure for documents no strategy can handle."""

    kind: Literal["UnknownProvider"] = "UnknownProvider"
    detail: str
    found_keywords: list[str] = Field(default_factory=list)
