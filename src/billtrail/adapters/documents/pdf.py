"""PDF text access using pdfplumber."""

import logging
from pathlib import Path

import pdfplumber

from ...domain.errors import ExtractionStage, PipelineError

logger = logging.getLogger(__name__)

# Page 1 is the cover; the figures live on the next two pages
SKIP_PAGES = 1
DETAIL_PAGES = 2


def read_detail_pages(path: Path) -> str:
    """Return the text of the bill detail pages joined by a space."""
    try:
        with pdfplumber.open(path) as pdf:
            pages = pdf.pages[SKIP_PAGES : SKIP_PAGES + DETAIL_PAGES]
            if not pages:
                raise PipelineError.extraction(
                    ExtractionStage.PERIOD, "PDF doesn't contain enough pages"
                )
            texts = [page.extract_text() or "" for page in pages]
    except PipelineError:
        raise
    except OSError as e:
        raise PipelineError.file_access(path, e) from e
    except Exception as e:
        # Bytes were readable but are not a parsable PDF
        raise PipelineError.extraction(
            ExtractionStage.PERIOD, f"Cannot parse PDF {path.name}: {e}"
        ) from e

    logger.debug(f"Read {len(texts)} detail pages from {path.name}")
    return " ".join(texts)
