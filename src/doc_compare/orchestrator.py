"""
doc_compare.orchestrator

Text + layout comparison of two documents.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from compare_utils.compare_layout import LayoutAccumulator, LayoutComparison, PageDiff, RasterPage
from compare_utils.compare_text import compare_text
from compare_utils.errors import ComparisonCancelled, ExtractionFailure, RasterizationFailure
from compare_utils.extractor import DocumentSource, PdfDocumentSource, document_name

from .options import ComparisonOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonReport:
    text_similarity: float
    text_divergence_count: int
    text_divergence_samples: Tuple[str, ...]
    layout_similarity: float
    layout_divergence_count: int
    layout_divergence_samples: Tuple[str, ...]

    @property
    def has_divergences(self) -> bool:
        return bool(self.text_divergence_samples or self.layout_divergence_samples)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "textSimilarity": self.text_similarity,
            "textDivergenceCount": self.text_divergence_count,
            "textDivergenceSamples": list(self.text_divergence_samples),
            "layoutSimilarity": self.layout_similarity,
            "layoutDivergenceCount": self.layout_divergence_count,
            "layoutDivergenceSamples": list(self.layout_divergence_samples),
        }


class _Side:
    """One input document while a run is in progress."""

    def __init__(self, document: Any, label: str):
        self.document = document
        self.label = label
        self.handle: Any = None
        self.page_count = 0


class ComparisonOrchestrator:
    """Runs the text and layout comparison of two documents.

    Work for document A and document B is done side by side on two worker
    threads. Pages are rendered and compared one index at a time, so at most
    one page per document is held in memory.
    """

    def __init__(self, source: Optional[DocumentSource] = None, options: Optional[ComparisonOptions] = None):
        self.source = source if source is not None else PdfDocumentSource()
        self.options = options if options is not None else ComparisonOptions()

    def run(self, doc_a: Any, doc_b: Any, cancel: Optional[threading.Event] = None) -> ComparisonReport:
        side_a = _Side(doc_a, f"A ({document_name(doc_a)})")
        side_b = _Side(doc_b, f"B ({document_name(doc_b)})")

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="doc-compare") as pool:
            self._open_both(pool, side_a, side_b)
            try:
                logger.info("Extracting text from %s and %s", side_a.label, side_b.label)
                text_a, text_b = _join(
                    pool.submit(self._extract, side_a),
                    pool.submit(self._extract, side_b),
                )

                logger.info("Comparing text")
                text = compare_text(text_a, text_b, max_samples=self.options.max_text_samples)

                logger.info(
                    "Comparing layout (%d vs %d pages, scale %.2f)",
                    side_a.page_count,
                    side_b.page_count,
                    self.options.scale,
                )
                layout = self._compare_layout(pool, side_a, side_b, cancel)
            finally:
                self._close(side_a)
                self._close(side_b)

        return ComparisonReport(
            text_similarity=text.similarity,
            text_divergence_count=text.divergence_count,
            text_divergence_samples=text.samples,
            layout_similarity=layout.similarity,
            layout_divergence_count=layout.mismatched_pixel_count,
            layout_divergence_samples=layout.samples,
        )

    # ---- document access ----

    def _open(self, side: _Side) -> None:
        try:
            side.handle = self.source.open(side.document)
        except Exception as exc:
            raise ExtractionFailure(side.label, "opening", exc) from exc

    def _open_both(self, pool: ThreadPoolExecutor, side_a: _Side, side_b: _Side) -> None:
        futures = [pool.submit(self._open, side_a), pool.submit(self._open, side_b)]
        wait(futures)
        if any(f.exception() is not None for f in futures):
            self._close(side_a)
            self._close(side_b)
            _join(*futures)

    def _close(self, side: _Side) -> None:
        if side.handle is None:
            return
        handle, side.handle = side.handle, None
        try:
            self.source.close(handle)
        except Exception as exc:
            logger.warning("Closing %s failed: %s", side.label, exc)

    def _extract(self, side: _Side) -> str:
        try:
            text = self.source.extract_text(side.handle)
        except Exception as exc:
            raise ExtractionFailure(side.label, "text extraction", exc) from exc
        try:
            side.page_count = int(self.source.page_count(side.handle))
        except Exception as exc:
            raise ExtractionFailure(side.label, "page count", exc) from exc
        logger.debug("%s: %d characters, %d pages", side.label, len(text), side.page_count)
        return text

    def _rasterize(self, side: _Side, page_index: int) -> Optional[RasterPage]:
        try:
            return self.source.rasterize_page(side.handle, page_index, self.options.scale)
        except Exception as exc:
            if self.options.raster_failure == "degrade":
                logger.warning("Page %d of %s could not be rendered, comparing it as blank: %s", page_index, side.label, exc)
                return None
            raise RasterizationFailure(side.label, page_index, exc) from exc

    # ---- layout ----

    def _compare_layout(
        self,
        pool: ThreadPoolExecutor,
        side_a: _Side,
        side_b: _Side,
        cancel: Optional[threading.Event],
    ) -> LayoutComparison:
        acc = LayoutAccumulator(side_a.page_count, side_b.page_count, threshold=self.options.pixel_threshold)
        for page_index in range(1, max(side_a.page_count, side_b.page_count) + 1):
            if cancel is not None and cancel.is_set():
                logger.info("Comparison cancelled before page %d", page_index)
                raise ComparisonCancelled(f"comparison cancelled before page {page_index}")
            self._compare_page(pool, acc, side_a, side_b, page_index)
        return acc.result()

    def _compare_page(
        self,
        pool: ThreadPoolExecutor,
        acc: LayoutAccumulator,
        side_a: _Side,
        side_b: _Side,
        page_index: int,
    ) -> PageDiff:
        # both renders of this index finish before the next index is requested
        fut_a = pool.submit(self._rasterize, side_a, page_index) if page_index <= side_a.page_count else None
        fut_b = pool.submit(self._rasterize, side_b, page_index) if page_index <= side_b.page_count else None
        page_a, page_b = _join(fut_a, fut_b)
        return acc.add_page(page_a, page_b)


def _join(fut_a: Optional[Future], fut_b: Optional[Future]) -> Tuple[Any, Any]:
    """Wait for both futures, then return their results (A's error first)."""
    wait([f for f in (fut_a, fut_b) if f is not None])
    return (
        fut_a.result() if fut_a is not None else None,
        fut_b.result() if fut_b is not None else None,
    )


def compare_documents(
    doc_a: Any,
    doc_b: Any,
    options: Optional[ComparisonOptions] = None,
    source: Optional[DocumentSource] = None,
    cancel: Optional[threading.Event] = None,
) -> ComparisonReport:
    """Compare two documents and return the merged text/layout report.

    Args:
        doc_a, doc_b: anything ``source`` can open; for the default PyMuPDF
            source, a PDF path or the PDF bytes.
        options: thresholds and render settings, defaults when omitted.
        source: document backend, PyMuPDF when omitted.
        cancel: set this event from another thread to stop between pages.

    Raises:
        ExtractionFailure: a document could not be opened or read.
        RasterizationFailure: a page could not be rendered (policy "raise").
        ComparisonCancelled: ``cancel`` was set.
    """
    return ComparisonOrchestrator(source=source, options=options).run(doc_a, doc_b, cancel=cancel)
