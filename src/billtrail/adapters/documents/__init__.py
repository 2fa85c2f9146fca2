"""Document source adapters."""

from .filesystem import FilesystemDocumentSource

__all__ = ["FilesystemDocumentSource"]
