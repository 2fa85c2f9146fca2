"""Offered (promotional, zero-cost) period detection."""

from collections.abc import Iterable

from .models import ConsumptionDetails, FinancialSummary

OFFERED_KEYWORDS = ("Tarifa Aniversário", "Fatura Aniversário")


class OfferedPeriodClassifier:
    """Flags a billing period as offered.

    Offered if the text carries a promotional label, or if the bill totals
    zero while consumption is positive (some promotional bills omit the label).
    """

    def __init__(self, keywords: Iterable[str] = OFFERED_KEYWORDS) -> None:
        self.keywords = tuple(k.casefold() for k in keywords)

    def classify(
        self,
        text: str,
        financial: FinancialSummary,
        consumption: ConsumptionDetails,
    ) -> bool:
        lowered = text.casefold()
        has_keyword = any(k in lowered for k in self.keywords)
        is_zero_total = financial.is_zero_bill() and consumption.total_units > 0
        return has_keyword or is_zero_total
