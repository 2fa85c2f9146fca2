"""Domain layer - core business logic."""

from .errors import ErrorKind, ExtractionStage, PipelineError
from .models import BillRecord, ConsumptionDetails, FinancialSummary, ProcessingOutcome

__all__ = [
    "BillRecord",
    "ConsumptionDetails",
    "ErrorKind",
    "ExtractionStage",
    "FinancialSummary",
    "PipelineError",
    "ProcessingOutcome",
]
