"""Document source port - interface for listing and reading bills."""

from abc import ABC, abstractmethod
from pathlib import Path


class DocumentSourcePort(ABC):
    """Interface for document discovery and text access."""

    @abstractmethod
    def list_documents(self, folder: Path, pattern: str) -> list[Path]:
        """List documents in folder matching a glob pattern.

        Raises a configuration error if the folder does not exist.
        """
        pass

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Return the bill detail text of a document."""
        pass
