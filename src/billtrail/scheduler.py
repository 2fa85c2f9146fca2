"""Periodic and on-new-file bill processing."""

import fnmatch
import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileCreatedEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .adapters.documents import FilesystemDocumentSource
from .adapters.serialization import create_serializer
from .adapters.storage import SqliteBillStore
from .config import Settings
from .domain.errors import PipelineError
from .domain.extraction import FieldExtractor
from .domain.models import ProcessingOutcome
from .domain.services import BatchOrchestrator, RecordExtractor

logger = logging.getLogger(__name__)

STABILITY_WAIT = 1.0  # seconds between size checks
STABILITY_TIMEOUT = 30  # max seconds to wait


def create_orchestrator(settings: Settings) -> BatchOrchestrator:
    """Create a BatchOrchestrator with configured adapters."""
    if settings.processing.lenient_numbers:
        logger.info("Lenient numbers: missing amounts are recorded as zero")
    return BatchOrchestrator(
        source=FilesystemDocumentSource(),
        store=SqliteBillStore(settings.paths.database),
        serializer=create_serializer(settings.storage.serialization),
        extractor=FieldExtractor(lenient=settings.processing.lenient_numbers),
    )


def create_record_extractor(settings: Settings) -> RecordExtractor:
    """Create a store-free RecordExtractor for dry extractions."""
    return RecordExtractor(
        source=FilesystemDocumentSource(),
        extractor=FieldExtractor(lenient=settings.processing.lenient_numbers),
    )


class NewBillHandler(FileSystemEventHandler):
    """Trigger a run when a matching bill appears in a watched folder.

    The run starts only once the file has stopped growing, so a bill that
    is still being copied in is never extracted half-written.
    """

    def __init__(
        self,
        pattern: str,
        trigger: Callable[[], object],
        stability_wait: float = STABILITY_WAIT,
        stability_timeout: float = STABILITY_TIMEOUT,
    ) -> None:
        self.pattern = pattern
        self.trigger = trigger
        self.stability_wait = stability_wait
        self.stability_timeout = stability_timeout

    def on_created(self, event: FileCreatedEvent) -> None:
        if event.is_directory:
            return

        path = Path(event.src_path)
        if not fnmatch.fnmatch(path.name, self.pattern):
            return

        logger.info(f"New bill detected: {path.name}")
        if not self._wait_for_stability(path):
            logger.warning(f"File never stabilized, left for next run: {path.name}")
            return
        self.trigger()

    def _wait_for_stability(self, path: Path) -> bool:
        """Wait until the file size is non-zero and unchanged between two checks."""
        start = time.time()
        last_size = -1

        while time.time() - start < self.stability_timeout:
            try:
                size = path.stat().st_size
            except FileNotFoundError:
                return False

            if size > 0 and size == last_size:
                return True

            last_size = size
            time.sleep(self.stability_wait)

        logger.warning(f"Timeout waiting for file: {path.name}")
        return False


class BillScheduler:
    """Runs all configured folders on startup, on an interval and on demand.

    Triggers that arrive while a run is active are ignored. Stopping sets
    the cancellation event, so an active run ends after its current file.
    """

    def __init__(self, settings: Settings, orchestrator: BatchOrchestrator) -> None:
        self.settings = settings
        self.orchestrator = orchestrator
        self.stop_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def folders(self) -> list[Path]:
        return self.settings.paths.folders

    def run_all(self) -> ProcessingOutcome | None:
        """Process every configured folder once.

        Returns None if another run was already active.
        """
        if not self._lock.acquire(blocking=False):
            logger.info("Run already in progress, ignoring trigger")
            return None
        try:
            return self._run_folders()
        finally:
            self._lock.release()

    def _run_folders(self) -> ProcessingOutcome | None:
        total = ProcessingOutcome()
        pattern = self.settings.processing.file_pattern

        for folder in self.folders:
            if self.stop_event.is_set():
                total.cancelled = True
                break
            try:
                outcome = self.orchestrator.try_process(folder, pattern, self.stop_event)
            except PipelineError as e:
                logger.error(f"Bill processing failed for folder {folder}: {e.describe()}")
                total.failure_messages.append(f"{folder}: {e.describe()}")
                continue

            if outcome is None:
                return None
            total = total.merge(outcome)

        logger.info(
            f"Scheduled run complete: found={total.files_found}"
            f" processed={total.processed} skipped={total.skipped}"
            f" failed={total.failed}"
        )
        return total

    def run(self) -> None:
        """Block until stop() or Ctrl-C."""
        schedule = self.settings.schedule
        observer = self._start_observer() if schedule.watch else None

        try:
            if schedule.run_on_startup:
                self.run_all()
            while not self.stop_event.wait(schedule.interval_seconds):
                self.run_all()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            self.stop()
        finally:
            if observer is not None:
                observer.stop()
                observer.join()

    def stop(self) -> None:
        self.stop_event.set()

    def _start_observer(self) -> Observer:
        handler = NewBillHandler(self.settings.processing.file_pattern, self.run_all)
        observer = Observer()
        for folder in self.folders:
            if folder.is_dir():
                observer.schedule(handler, str(folder), recursive=False)
            else:
                logger.warning(f"Not watching missing folder: {folder}")
        observer.start()
        return observer


def run_scheduler(settings: Settings) -> None:
    """Run the bill processing daemon."""
    if not settings.schedule.enabled:
        logger.info("Bill processing schedule is disabled")
        return

    if not settings.paths.folders:
        logger.warning("No bill folders configured. Scheduler will not run")
        return

    scheduler = BillScheduler(settings, create_orchestrator(settings))

    logger.info(f"Folders: {', '.join(str(f) for f in scheduler.folders)}")
    logger.info(f"Pattern: {settings.processing.file_pattern}")
    logger.info(f"Interval: {settings.schedule.interval_days} days")
    logger.info(f"Database: {settings.paths.database}")

    scheduler.run()
