"""Pipeline error taxonomy.

Every failure is a single ``PipelineError`` tagged with an ``ErrorKind``
and, where relevant, a discriminator (extraction stage or field name).
"""

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Kinds of pipeline failures."""

    FILE_ACCESS = "file_access"
    EXTRACTION = "extraction"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    CONFIGURATION = "configuration"
    RUN_IN_PROGRESS = "run_in_progress"
    UNEXPECTED = "unexpected"


class ExtractionStage(str, Enum):
    """Extraction phase at which a document failed."""

    PERIOD = "period"
    CONSUMPTION = "consumption"
    FINANCIAL = "financial"


KIND_LABELS = {
    ErrorKind.FILE_ACCESS: "File access error",
    ErrorKind.EXTRACTION: "Extraction failed",
    ErrorKind.VALIDATION: "Validation failed",
    ErrorKind.PERSISTENCE: "Persistence error",
    ErrorKind.CONFIGURATION: "Configuration error",
    ErrorKind.RUN_IN_PROGRESS: "Run in progress",
    ErrorKind.UNEXPECTED: "Unexpected error",
}


class PipelineError(Exception):
    """Tagged pipeline failure."""

    def __init__(self, kind: ErrorKind, message: str, detail: str | None = None) -> None:
        self.kind = kind
        self.message = message
        self.detail = detail
        super().__init__(message)

    @classmethod
    def file_access(cls, path: Path, cause: Exception) -> "PipelineError":
        return cls(ErrorKind.FILE_ACCESS, f"Cannot read {path.name}: {cause}")

    @classmethod
    def extraction(cls, stage: ExtractionStage, message: str) -> "PipelineError":
        return cls(ErrorKind.EXTRACTION, message, detail=stage.value)

    @classmethod
    def validation(cls, field: str, message: str) -> "PipelineError":
        return cls(ErrorKind.VALIDATION, message, detail=field)

    @classmethod
    def persistence(cls, message: str) -> "PipelineError":
        return cls(ErrorKind.PERSISTENCE, message)

    @classmethod
    def configuration(cls, message: str) -> "PipelineError":
        return cls(ErrorKind.CONFIGURATION, message)

    @classmethod
    def run_in_progress(cls) -> "PipelineError":
        return cls(ErrorKind.RUN_IN_PROGRESS, "A processing run is already in progress")

    @classmethod
    def unexpected(cls, cause: Exception) -> "PipelineError":
        return cls(ErrorKind.UNEXPECTED, f"{type(cause).__name__}: {cause}")

    @property
    def stage(self) -> ExtractionStage | None:
        if self.kind is ErrorKind.EXTRACTION and self.detail:
            return ExtractionStage(self.detail)
        return None

    @property
    def field(self) -> str | None:
        return self.detail if self.kind is ErrorKind.VALIDATION else None

    def describe(self) -> str:
        """Human-readable message with kind label and discriminator."""
        label = KIND_LABELS[self.kind]
        if self.kind is ErrorKind.EXTRACTION:
            label = f"{label} [stage={self.detail}]"
        elif self.kind is ErrorKind.VALIDATION:
            label = f"{label} [field={self.detail}]"
        return f"{label} - {self.message}"
