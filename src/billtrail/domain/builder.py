"""Bill record assembly and validation."""

from pathlib import Path

from .errors import PipelineError
from .extraction import ExtractedFields
from .models import MIN_VALID_YEAR, BillRecord


class RecordBuilder:
    """Assembles extracted fields into a validated, immutable BillRecord."""

    def build(
        self, fields: ExtractedFields, source_path: Path, is_offered_period: bool
    ) -> BillRecord:
        record = BillRecord(
            period=fields.period,
            month=fields.month,
            year=fields.year,
            consumption=fields.consumption,
            financial=fields.financial,
            source_path=source_path,
            is_offered_period=is_offered_period,
        )
        self.validate(record)
        return record

    @staticmethod
    def validate(record: BillRecord) -> None:
        """Raise a validation error naming the first invalid field."""
        if not record.month.strip():
            raise PipelineError.validation("month", "Month cannot be empty")
        if record.year <= MIN_VALID_YEAR:
            raise PipelineError.validation(
                "year", f"Year must be after {MIN_VALID_YEAR}, got {record.year}"
            )
        if not record.period.strip():
            raise PipelineError.validation("period", "Period cannot be empty")
