"""Pattern-based field extraction from bill text."""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .errors import ExtractionStage, PipelineError
from .models import ConsumptionDetails, FinancialSummary

logger = logging.getLogger(__name__)

# "01 Jan 2025 a 31 Jan 2025" (bill locale) or "01 Jan 2025 to 31 Jan 2025"
PERIOD_PATTERN = re.compile(r"(\d{2} \w{3} \d{4} (?:a|to) \d{2} \w{3} \d{4})")
MONTH_TOKEN = 5
YEAR_TOKEN = 6

BASE_PRICE_PATTERN = re.compile(r"Termo de Energia \(Real\).*?(\d,\d{6})")
DISCOUNT_PATTERN = re.compile(r"Desconto Termo de Energia Social.*?(\d,\d{6})")
TOTAL_UNITS_PATTERN = re.compile(r"Imposto Especial Consumo \(Real\)\s*(\d+)\s*kWh")

ENERGY_VALUE_PATTERN = re.compile(r"TOTAL Luz \(Consumo\)\s*(\d+,\d{2})")
TAXES_PATTERN = re.compile(r"TOTAL Taxas e Impostos\s*(\d+,\d{2})")
TOTAL_AMOUNT_PATTERN = re.compile(r"TOTAL DA FATURA DE LUZ\s*(\d+,\d{2})")

MONTHS = {
    "jan": "January",
    "fev": "February",
    "mar": "March",
    "abr": "April",
    "mai": "May",
    "jun": "June",
    "jul": "July",
    "ago": "August",
    "set": "September",
    "out": "October",
    "nov": "November",
    "dez": "December",
}


def parse_decimal_comma(value: str | None) -> Decimal:
    """Parse "0,123456" style numbers. Empty or unparsable input gives zero."""
    if not value or not value.strip():
        return Decimal(0)
    try:
        result = Decimal(value.strip().replace(",", "."))
    except InvalidOperation:
        return Decimal(0)
    return result if result.is_finite() else Decimal(0)


def translate_month(abbreviation: str) -> str:
    """Map a 3-letter bill month to its English name; unknown passes through."""
    return MONTHS.get(abbreviation.lower(), abbreviation)


def normalize_text(text: str) -> str:
    """Collapse all whitespace runs (including page breaks) to single spaces."""
    return " ".join(text.split())


@dataclass(frozen=True)
class ExtractedFields:
    """Raw extraction result, before classification and validation."""

    period: str
    month: str
    year: int
    consumption: ConsumptionDetails
    financial: FinancialSummary
    text: str


class FieldExtractor:
    """Pulls period, consumption and financial fields out of bill text.

    A missing period is fatal. Missing consumption and financial fields
    default to zero unless ``lenient`` is off, in which case they fail the
    extraction at their stage.
    """

    def __init__(self, lenient: bool = True) -> None:
        self.lenient = lenient

    def extract(self, text: str) -> ExtractedFields:
        text = normalize_text(text)
        period, month, year = self.extract_period(text)
        consumption = self.extract_consumption(text)
        financial = self.extract_financial(text)
        return ExtractedFields(
            period=period,
            month=month,
            year=year,
            consumption=consumption,
            financial=financial,
            text=text,
        )

    def extract_period(self, text: str) -> tuple[str, str, int]:
        match = PERIOD_PATTERN.search(text)
        if not match:
            raise PipelineError.extraction(
                ExtractionStage.PERIOD,
                "Failed to extract period: period pattern not found in document",
            )

        period = match.group(1)
        parts = period.split()
        month = translate_month(parts[MONTH_TOKEN])
        try:
            year = int(parts[YEAR_TOKEN])
        except ValueError as e:
            raise PipelineError.extraction(
                ExtractionStage.PERIOD, f"Failed to extract period: invalid year format ({e})"
            ) from e

        return period, month, year

    def extract_consumption(self, text: str) -> ConsumptionDetails:
        stage = ExtractionStage.CONSUMPTION
        units = self._find(TOTAL_UNITS_PATTERN, text, stage, "total_units")
        return ConsumptionDetails(
            total_units=int(units) if units.isdigit() else 0,
            base_price=parse_decimal_comma(
                self._find(BASE_PRICE_PATTERN, text, stage, "base_price")
            ),
            discount_value=parse_decimal_comma(
                self._find(DISCOUNT_PATTERN, text, stage, "discount_value")
            ),
        )

    def extract_financial(self, text: str) -> FinancialSummary:
        stage = ExtractionStage.FINANCIAL
        return FinancialSummary(
            energy_value=parse_decimal_comma(
                self._find(ENERGY_VALUE_PATTERN, text, stage, "energy_value")
            ),
            taxes_and_fees=parse_decimal_comma(
                self._find(TAXES_PATTERN, text, stage, "taxes_and_fees")
            ),
            total_amount=parse_decimal_comma(
                self._find(TOTAL_AMOUNT_PATTERN, text, stage, "total_amount")
            ),
        )

    def _find(
        self, pattern: re.Pattern[str], text: str, stage: ExtractionStage, name: str
    ) -> str:
        match = pattern.search(text)
        if match:
            return match.group(1)
        if not self.lenient:
            raise PipelineError.extraction(
                stage, f"Failed to extract {stage.value}: {name} not found in document"
            )
        logger.warning(f"Field not found, defaulting to zero: {name}")
        return ""
