"""Content fingerprints for deduplication."""

import hashlib
from pathlib import Path

from .errors import PipelineError

CHUNK_SIZE = 64 * 1024


def compute_hash(path: Path) -> str:
    """SHA-256 of the file's bytes as uppercase hex.

    Depends on content only, not on name, location or mtime.
    """
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise PipelineError.file_access(path, e) from e
    return digest.hexdigest().upper()
