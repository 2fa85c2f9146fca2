"""Domain services - orchestrate business logic."""

import logging
import threading
from pathlib import Path

from ..ports.documents import DocumentSourcePort
from ..ports.serializer import SerializerPort
from ..ports.store import BillStorePort
from .builder import RecordBuilder
from .classification import OfferedPeriodClassifier
from .dedup import DeduplicationGate
from .errors import ErrorKind, PipelineError
from .extraction import FieldExtractor
from .hashing import compute_hash
from .models import BillRecord, ProcessingOutcome

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.pdf"


class RecordExtractor:
    """Reads one document and turns it into a validated BillRecord.

    Needs no store, so it also serves dry extractions.
    """

    def __init__(
        self,
        source: DocumentSourcePort,
        extractor: FieldExtractor | None = None,
        classifier: OfferedPeriodClassifier | None = None,
        builder: RecordBuilder | None = None,
    ) -> None:
        self.source = source
        self.extractor = extractor or FieldExtractor()
        self.classifier = classifier or OfferedPeriodClassifier()
        self.builder = builder or RecordBuilder()

    def extract_record(self, path: Path) -> BillRecord:
        """Extract, classify and build a record for one document."""
        text = self.source.read_text(path)
        fields = self.extractor.extract(text)
        offered = self.classifier.classify(
            fields.text, fields.financial, fields.consumption
        )
        return self.builder.build(fields, path, offered)


class BatchOrchestrator:
    """Drives a folder of bills through hash, dedup, extract and persist.

    Documents are processed one at a time in listing order. A failing
    document is recorded in the outcome and never stops the batch. A document
    whose bytes change between hashing and extraction fails rather than being
    stored under a stale fingerprint. Only one run may be active per
    orchestrator.
    """

    def __init__(
        self,
        source: DocumentSourcePort,
        store: BillStorePort,
        serializer: SerializerPort,
        extractor: FieldExtractor | None = None,
        classifier: OfferedPeriodClassifier | None = None,
        builder: RecordBuilder | None = None,
    ) -> None:
        self.source = source
        self.store = store
        self.serializer = serializer
        self.gate = DeduplicationGate(store)
        self.records = RecordExtractor(source, extractor, classifier, builder)
        self._run_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._run_lock.locked()

    def process(
        self,
        folder: Path,
        file_pattern: str = DEFAULT_PATTERN,
        cancel: threading.Event | None = None,
    ) -> ProcessingOutcome:
        """Process every matching document in folder exactly once.

        Raises a configuration error for a missing folder and a
        run-in-progress error if another run holds this orchestrator.
        """
        if not self._run_lock.acquire(blocking=False):
            raise PipelineError.run_in_progress()
        try:
            return self._run(folder, file_pattern, cancel)
        finally:
            self._run_lock.release()

    def try_process(
        self,
        folder: Path,
        file_pattern: str = DEFAULT_PATTERN,
        cancel: threading.Event | None = None,
    ) -> ProcessingOutcome | None:
        """Like process(), but a concurrent trigger returns None."""
        try:
            return self.process(folder, file_pattern, cancel)
        except PipelineError as e:
            if e.kind is ErrorKind.RUN_IN_PROGRESS:
                logger.info(f"Run already in progress, ignoring trigger for {folder}")
                return None
            raise

    def extract_record(self, path: Path) -> BillRecord:
        return self.records.extract_record(path)

    def _run(
        self, folder: Path, file_pattern: str, cancel: threading.Event | None
    ) -> ProcessingOutcome:
        if not str(folder).strip():
            raise PipelineError.configuration("Folder path cannot be empty")

        paths = self.source.list_documents(folder, file_pattern)
        outcome = ProcessingOutcome(files_found=len(paths))
        logger.info(f"Processing folder: {folder} ({len(paths)} files)")

        for path in paths:
            if cancel is not None and cancel.is_set():
                outcome.cancelled = True
                logger.warning(
                    f"Run cancelled after {outcome.attempted} of {len(paths)} files"
                )
                break
            self._process_document(path, outcome)

        logger.info(
            f"Run complete: found={outcome.files_found} processed={outcome.processed}"
            f" skipped={outcome.skipped} failed={outcome.failed}"
        )
        for message in outcome.failure_messages:
            logger.warning(f"Processing error: {message}")

        return outcome

    def _process_document(self, path: Path, outcome: ProcessingOutcome) -> None:
        logger.info(f"Processing: {path.name}")
        try:
            fingerprint = compute_hash(path)

            if self.gate.exists(fingerprint):
                logger.info(f"Skipped (already stored): {path.name}")
                outcome.skipped += 1
                return

            record = self.extract_record(path)
            # The fingerprint must describe the bytes that were parsed
            if compute_hash(path) != fingerprint:
                raise PipelineError(
                    ErrorKind.FILE_ACCESS, f"{path.name} changed while being processed"
                )
            serialized = self.serializer.serialize(record)
            self._save(record, fingerprint, serialized)

        except PipelineError as e:
            logger.error(f"Failed: {path.name} - {e.describe()}")
            outcome.record_failure(path.name, e)
            return
        except Exception as e:
            logger.exception(f"Unexpected failure: {path.name}")
            outcome.record_failure(path.name, PipelineError.unexpected(e))
            return

        logger.info(f"Stored: {path.name} ({record.summary()})")
        outcome.processed += 1

    def _save(self, record: BillRecord, fingerprint: str, serialized: str) -> None:
        try:
            self.store.save(record, fingerprint, serialized)
        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError.persistence(f"Save failed: {e}") from e
