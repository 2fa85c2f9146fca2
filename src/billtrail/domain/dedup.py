"""Deduplication gate in front of extraction."""

import logging

from ..ports.store import BillStorePort
from .errors import PipelineError

logger = logging.getLogger(__name__)


class DeduplicationGate:
    """Decides skip-vs-process by asking the store for a fingerprint.

    Store failures surface as persistence errors, never as "not found".
    """

    def __init__(self, store: BillStorePort) -> None:
        self.store = store

    def exists(self, fingerprint: str) -> bool:
        try:
            known = self.store.exists(fingerprint)
        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError.persistence(f"Deduplication check failed: {e}") from e

        if known:
            logger.debug(f"Known fingerprint: {fingerprint[:16]}")
        return known
