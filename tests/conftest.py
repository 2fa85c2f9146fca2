"""Shared test fixtures."""

from collections.abc import Callable
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from billtrail.domain.models import BillRecord, ConsumptionDetails, FinancialSummary
from billtrail.ports.documents import DocumentSourcePort
from billtrail.ports.serializer import SerializerPort
from billtrail.ports.store import BillStorePort


def make_bill_text(
    period: str = "01 Jan 2025 to 31 Jan 2025",
    units: int = 150,
    base_price: str = "0,150000",
    discount: str = "0,000000",
    energy: str = "22,50",
    taxes: str = "22,80",
    total: str = "45,30",
    extra: str = "",
) -> str:
    """Detail-page text laid out like a real bill."""
    return (
        "Detalhe da Fatura\n"
        f"Período de faturação {period}\n"
        f"Termo de Energia (Real) {units} kWh {base_price}\n"
        f"Desconto Termo de Energia Social {units} kWh {discount}\n"
        f"Imposto Especial Consumo (Real) {units} kWh 0,001000\n"
        f"TOTAL Luz (Consumo) {energy}\n"
        f"TOTAL Taxas e Impostos {taxes}\n"
        f"TOTAL DA FATURA DE LUZ {total}\n"
        f"{extra}\n"
    )


@pytest.fixture
def bill_text() -> Callable[..., str]:
    """Factory for bill detail text."""
    return make_bill_text


@pytest.fixture
def sample_record() -> BillRecord:
    """Sample January bill."""
    return BillRecord(
        period="01 Jan 2025 to 31 Jan 2025",
        month="January",
        year=2025,
        consumption=ConsumptionDetails(
            total_units=150,
            base_price=Decimal("0.150000"),
            discount_value=Decimal("0.020000"),
        ),
        financial=FinancialSummary(
            energy_value=Decimal("22.50"),
            taxes_and_fees=Decimal("22.80"),
            total_amount=Decimal("45.30"),
        ),
        source_path=Path("/bills/jan.pdf"),
    )


@pytest.fixture
def mock_source() -> MagicMock:
    """Mock document source port."""
    mock = MagicMock(spec=DocumentSourcePort)
    mock.read_text.return_value = make_bill_text()
    return mock


@pytest.fixture
def mock_store() -> MagicMock:
    """Mock store port with no known fingerprints."""
    mock = MagicMock(spec=BillStorePort)
    mock.exists.return_value = False
    return mock


@pytest.fixture
def mock_serializer() -> MagicMock:
    """Mock serializer port."""
    mock = MagicMock(spec=SerializerPort)
    mock.serialize.return_value = "{}"
    return mock
