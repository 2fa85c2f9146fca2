"""Domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from .errors import PipelineError

DOCUMENT_TYPE = "Electricity Bill"
MIN_VALID_YEAR = 2000


@dataclass(frozen=True)
class ConsumptionDetails:
    """Consumption block of a bill."""

    total_units: int
    base_price: Decimal
    discount_value: Decimal

    @property
    def price_after_discount(self) -> Decimal:
        # Always derived, never parsed
        return self.base_price - self.discount_value

    def total_cost(self) -> Decimal:
        return self.total_units * self.price_after_discount

    def discount_percentage(self) -> Decimal:
        if self.base_price == 0:
            return Decimal(0)
        return self.discount_value / self.base_price * 100


@dataclass(frozen=True)
class FinancialSummary:
    """Financial block of a bill."""

    energy_value: Decimal
    taxes_and_fees: Decimal
    total_amount: Decimal

    def tax_percentage(self) -> Decimal:
        if self.total_amount == 0:
            return Decimal(0)
        return self.taxes_and_fees / self.total_amount * 100

    def is_zero_bill(self) -> bool:
        return self.total_amount == 0


@dataclass(frozen=True)
class BillRecord:
    """A single extracted bill. Built once, never mutated."""

    period: str  # Raw text, e.g. "01 Jan 2025 to 31 Jan 2025"
    month: str  # Canonical English month name
    year: int
    consumption: ConsumptionDetails
    financial: FinancialSummary
    source_path: Path
    is_offered_period: bool = False
    document_type: str = DOCUMENT_TYPE

    def is_valid(self) -> bool:
        return (
            bool(self.month.strip())
            and self.year > MIN_VALID_YEAR
            and bool(self.period.strip())
        )

    def summary(self) -> str:
        return (
            f"{self.month}/{self.year} - {self.consumption.total_units} kWh"
            f" - €{self.financial.total_amount:.2f}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain nested mapping for serializers (decimals as strings)."""
        return {
            "document_type": self.document_type,
            "period": self.period,
            "month": self.month,
            "year": self.year,
            "is_offered_period": self.is_offered_period,
            "consumption": {
                "total_units": self.consumption.total_units,
                "base_price": str(self.consumption.base_price),
                "discount_value": str(self.consumption.discount_value),
                "price_after_discount": str(self.consumption.price_after_discount),
            },
            "financial": {
                "energy_value": str(self.financial.energy_value),
                "taxes_and_fees": str(self.financial.taxes_and_fees),
                "total_amount": str(self.financial.total_amount),
            },
            "source_path": str(self.source_path),
        }


@dataclass
class ProcessingOutcome:
    """Aggregate result of one batch run."""

    files_found: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    failure_messages: list[str] = field(default_factory=list)
    cancelled: bool = False

    @property
    def attempted(self) -> int:
        return self.processed + self.skipped + self.failed

    @property
    def consistent(self) -> bool:
        """Tally check; only guaranteed for runs that were not cancelled."""
        return self.attempted == self.files_found

    def record_failure(self, file_name: str, error: PipelineError) -> None:
        self.failed += 1
        self.failure_messages.append(f"{file_name}: {error.describe()}")

    def merge(self, other: "ProcessingOutcome") -> "ProcessingOutcome":
        """Combine two outcomes, e.g. from several folders of one run."""
        return ProcessingOutcome(
            files_found=self.files_found + other.files_found,
            processed=self.processed + other.processed,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
            failure_messages=[*self.failure_messages, *other.failure_messages],
            cancelled=self.cancelled or other.cancelled,
        )
