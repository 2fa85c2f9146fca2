"""Document source backed by a local folder."""

import logging
from pathlib import Path

from ...domain.errors import PipelineError
from ...ports.documents import DocumentSourcePort
from .pdf import read_detail_pages

logger = logging.getLogger(__name__)


class FilesystemDocumentSource(DocumentSourcePort):
    """Lists bills in a folder and reads their text.

    PDFs go through pdfplumber; any other file is read as already
    extracted UTF-8 text.
    """

    def list_documents(self, folder: Path, pattern: str) -> list[Path]:
        folder = Path(folder).expanduser()
        if not folder.is_dir():
            raise PipelineError.configuration(f"Directory not found: {folder}")
        return sorted(p for p in folder.glob(pattern) if p.is_file())

    def read_text(self, path: Path) -> str:
        if path.suffix.lower() == ".pdf":
            return read_detail_pages(path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PipelineError.file_access(path, e) from e
