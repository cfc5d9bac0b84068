"""
Document access for the comparison engine.

- DocumentSource: what the engine needs from a document backend
  (open/close, full text, page count, one rendered page at a time)
- PdfDocumentSource: PyMuPDF implementation, accepting a path or raw PDF bytes
- pages are 1-based; rendered pages are RGBA on a white background
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Protocol, Union

import fitz  # PyMuPDF
from PIL import Image

from compare_utils.compare_layout import RasterPage

logger = logging.getLogger(__name__)

DocumentInput = Union[str, Path, bytes, bytearray]

DEFAULT_SCALE = 1.5

# PyMuPDF documents must not be used from several threads at once
_FITZ_LOCK = threading.RLock()


def document_name(document: Any) -> str:
    """Short human-readable name for error messages and logs."""
    if isinstance(document, (bytes, bytearray)):
        return f"<{len(document)} bytes>"
    if isinstance(document, (str, Path)):
        return Path(document).name
    return getattr(document, "name", None) or type(document).__name__


class DocumentSource(Protocol):
    def open(self, document: Any) -> Any: ...

    def close(self, handle: Any) -> None: ...

    def extract_text(self, handle: Any) -> str: ...

    def page_count(self, handle: Any) -> int: ...

    def rasterize_page(self, handle: Any, page_index: int, scale: float) -> RasterPage: ...


class PdfDocumentSource:
    """DocumentSource backed by PyMuPDF (fitz)."""

    def open(self, document: DocumentInput) -> fitz.Document:
        with _FITZ_LOCK:
            if isinstance(document, (bytes, bytearray)):
                doc = fitz.open(stream=bytes(document), filetype="pdf")
            else:
                doc = fitz.open(str(document))
            if doc.needs_pass:
                doc.close()
                raise ValueError("document is encrypted")
            logger.debug("opened %s (%d pages)", document_name(document), doc.page_count)
            return doc

    def close(self, handle: fitz.Document) -> None:
        with _FITZ_LOCK:
            handle.close()

    def extract_text(self, handle: fitz.Document) -> str:
        """Full text, one line-terminated chunk per page."""
        parts = []
        with _FITZ_LOCK:
            for page in handle:
                parts.append((page.get_text("text") or "") + "\n")
        return "".join(parts)

    def page_count(self, handle: fitz.Document) -> int:
        with _FITZ_LOCK:
            return handle.page_count

    def rasterize_page(self, handle: fitz.Document, page_index: int, scale: float = DEFAULT_SCALE) -> RasterPage:
        """Render page ``page_index`` (1-based) at ``scale`` (1.0 = 72dpi)."""
        with _FITZ_LOCK:
            if not 1 <= page_index <= handle.page_count:
                raise IndexError(f"page {page_index} out of range (1..{handle.page_count})")
            page = handle.load_page(page_index - 1)
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            img = Image.frombytes("RGB", [pix.width, pix.height], pix.samples)
        return RasterPage.from_image(img)

