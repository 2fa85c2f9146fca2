"""Store port - interface for bill persistence."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import BillRecord


@dataclass
class StoredBill:
    """A persisted bill as read back from the store."""

    id: int
    file_path: str
    file_hash: str
    month: str
    year: int
    period: str
    is_offered_period: bool
    total_units: int
    base_price: Decimal
    discount_value: Decimal
    price_after_discount: Decimal
    energy_value: Decimal
    taxes_and_fees: Decimal
    total_amount: Decimal
    processed_at: str
    serialized: str

    def summary(self) -> str:
        offered = " (offered)" if self.is_offered_period else ""
        return (
            f"{self.month}/{self.year} - {self.total_units} kWh"
            f" - €{self.total_amount:.2f}{offered}"
        )


class BillStorePort(ABC):
    """Interface for bill persistence.

    A successful save must be visible to the next exists() call.
    """

    @abstractmethod
    def exists(self, fingerprint: str) -> bool:
        """Check whether a document with this fingerprint was stored."""
        pass

    @abstractmethod
    def save(self, record: "BillRecord", fingerprint: str, serialized: str) -> None:
        """Persist a record with its fingerprint and serialized form."""
        pass

    @abstractmethod
    def get_bills_by_year(self, year: int) -> list[StoredBill]:
        pass

    @abstractmethod
    def get_all_bills(self) -> list[StoredBill]:
        pass

    @abstractmethod
    def get_total_count(self) -> int:
        pass
