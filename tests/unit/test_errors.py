"""Unit tests for the pipeline error taxonomy."""

from pathlib import Path

from billtrail.domain.errors import KIND_LABELS, ErrorKind, ExtractionStage, PipelineError


class TestPipelineError:
    """Tests for PipelineError."""

    def test_every_kind_has_label(self) -> None:
        assert set(KIND_LABELS) == set(ErrorKind)

    def test_extraction_stage(self) -> None:
        error = PipelineError.extraction(ExtractionStage.FINANCIAL, "bad total")
        assert error.kind is ErrorKind.EXTRACTION
        assert error.stage is ExtractionStage.FINANCIAL
        assert error.field is None
        assert error.describe() == "Extraction failed [stage=financial] - bad total"

    def test_validation_field(self) -> None:
        error = PipelineError.validation("year", "too old")
        assert error.field == "year"
        assert error.stage is None
        assert error.describe() == "Validation failed [field=year] - too old"

    def test_file_access_message(self) -> None:
        error = PipelineError.file_access(
            Path("/bills/jan.pdf"), PermissionError("Permission denied")
        )
        assert error.kind is ErrorKind.FILE_ACCESS
        assert error.describe() == "File access error - Cannot read jan.pdf: Permission denied"

    def test_unexpected_names_cause(self) -> None:
        error = PipelineError.unexpected(KeyError("x"))
        assert error.describe().startswith("Unexpected error - KeyError")

    def test_is_exception(self) -> None:
        error = PipelineError.configuration("Directory not found: /nope")
        assert str(error) == "Directory not found: /nope"
