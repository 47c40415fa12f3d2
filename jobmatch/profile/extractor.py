"""PDF text extraction using pymupdf.

The document is read item by item (one text span at a time); exhausting
the iterator marks the end of the stream. ``extract_text`` runs the
blocking parse on a worker thread so the pipeline awaits a single result.
"""

import asyncio
import logging
from collections.abc import Iterator
from pathlib import Path

from jobmatch.core.errors import ExtractionError

logger = logging.getLogger(__name__)


def _import_pymupdf():  # type: ignore[no-untyped-def]
    try:
        import pymupdf
    except ImportError:
        msg = (
            "pymupdf is required for PDF extraction. "
            "Install with: pip install pymupdf"
        )
        raise ImportError(msg) from None
    return pymupdf


def iter_text_items(data: bytes) -> Iterator[str]:
    """Yield the text items of a PDF in reading order.

    Raises:
        ExtractionError: If the bytes are not a readable PDF.
    """
    pymupdf = _import_pymupdf()

    try:
        doc = pymupdf.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        msg = f"PDF parsing error: {e}"
        raise ExtractionError(msg) from e

    try:
        for page in doc:
            try:
                content = page.get_text("dict")
            except (RuntimeError, ValueError) as e:
                msg = f"PDF parsing error: {e}"
                raise ExtractionError(msg) from e
            for block in content.get("blocks", []):
                for line in block.get("lines", []):
                    for span in line.get("spans", []):
                        text = span.get("text", "")
                        if text:
                            yield text
    finally:
        doc.close()


def extract_text_from_bytes(data: bytes) -> str:
    """Extract the text of an in-memory PDF as one space-joined string.

    Raises:
        ExtractionError: If the PDF is malformed or holds no text.
    """
    if not data:
        msg = "PDF parsing error: document is empty"
        raise ExtractionError(msg)

    items = list(iter_text_items(data))
    text = " ".join(items)
    if not text.strip():
        msg = "No text could be extracted from the PDF"
        raise ExtractionError(msg)

    logger.debug("Extracted %d text items (%d chars)", len(items), len(text))
    return text


async def extract_text(data: bytes) -> str:
    """Awaitable wrapper around :func:`extract_text_from_bytes`."""
    return await asyncio.to_thread(extract_text_from_bytes, data)


def read_pdf(path: str | Path) -> bytes:
    """Read a PDF file from disk for the extraction flows.

    Raises:
        FileNotFoundError: If the PDF file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"PDF file not found: {path}"
        raise FileNotFoundError(msg)
    return path.read_bytes()
