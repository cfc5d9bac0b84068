"""
Layout comparison utilities.

- RasterPage: one rendered page as an RGBA pixel buffer
- compare_layout(pages_a, pages_b): pixel-level similarity of two page
  sequences paired by position, with page-count mismatch handling
- LayoutAccumulator: the same computation fed one page pair at a time, so a
  caller can render, compare and drop pages without holding a whole document
- pixels are matched with pixelmatch (perceptual YIQ distance, anti-aliasing
  ignored), at the larger of the two page canvases
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image
from pixelmatch import pixelmatch

from compare_utils.rounding import percent

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.1

# pixelmatch's anti-aliasing check reads up to two pixels around a candidate
_AA_MARGIN = 3


@dataclass(frozen=True)
class RasterPage:
    width: int
    height: int
    samples: bytes = field(repr=False)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"invalid raster size {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.samples) != expected:
            raise ValueError(
                f"RGBA buffer for {self.width}x{self.height} needs {expected} bytes, got {len(self.samples)}"
            )

    @classmethod
    def empty(cls) -> "RasterPage":
        return cls(0, 0, b"")

    @classmethod
    def from_image(cls, image: Image.Image) -> "RasterPage":
        """Build a page from any Pillow image (converted to RGBA)."""
        rgba = image.convert("RGBA")
        width, height = rgba.size
        return cls(width, height, rgba.tobytes())

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def to_array(self) -> np.ndarray:
        """Read-only ``(height, width, 4)`` uint8 view of the samples."""
        return np.frombuffer(self.samples, dtype=np.uint8).reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class PageDiff:
    index: int  # 1-based
    width: int
    height: int
    mismatched_pixels: int


@dataclass(frozen=True)
class LayoutComparison:
    similarity: float
    mismatched_pixel_count: int
    samples: Tuple[str, ...] = ()
    total_pixels: int = 0
    page_count_a: int = 0
    page_count_b: int = 0
    pages: Tuple[PageDiff, ...] = field(default=(), repr=False)


def _canvas(page: RasterPage, width: int, height: int) -> np.ndarray:
    """Place ``page`` top-left on a transparent canvas of the given size."""
    if page.width == width and page.height == height:
        return page.to_array()
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    if not page.is_empty:
        canvas[: page.height, : page.width] = page.to_array()
    return canvas


def count_mismatched_pixels(page_a: RasterPage, page_b: RasterPage, threshold: float = DEFAULT_THRESHOLD) -> int:
    """Number of pixels that differ between two pages at the larger canvas size."""
    width = max(page_a.width, page_b.width)
    height = max(page_a.height, page_b.height)
    if width == 0 or height == 0:
        return 0

    img_a = _canvas(page_a, width, height)
    img_b = _canvas(page_b, width, height)

    changed = np.any(img_a != img_b, axis=2)
    if not changed.any():
        return 0

    # Only the window around changed samples can hold mismatches; the margin
    # keeps pixelmatch's anti-aliasing neighbourhood identical to a full run.
    rows = np.flatnonzero(changed.any(axis=1))
    cols = np.flatnonzero(changed.any(axis=0))
    y0 = max(int(rows[0]) - _AA_MARGIN, 0)
    y1 = min(int(rows[-1]) + _AA_MARGIN + 1, height)
    x0 = max(int(cols[0]) - _AA_MARGIN, 0)
    x1 = min(int(cols[-1]) + _AA_MARGIN + 1, width)

    win_a = np.ascontiguousarray(img_a[y0:y1, x0:x1]).tobytes()
    win_b = np.ascontiguousarray(img_b[y0:y1, x0:x1]).tobytes()
    return int(pixelmatch(win_a, win_b, x1 - x0, y1 - y0, threshold=threshold))


class LayoutAccumulator:
    """Running totals for a layout comparison fed one page pair at a time.

    Pages must be added in increasing page order. A side without a page
    (``None``) counts as a 0x0 page: the other side's full area still goes
    into the pixel total.
    """

    def __init__(self, page_count_a: int, page_count_b: int, threshold: float = DEFAULT_THRESHOLD):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.page_count_a = page_count_a
        self.page_count_b = page_count_b
        self.threshold = threshold
        self.total_pixels = 0
        self.total_mismatched = 0
        self._pages: List[PageDiff] = []

    def add_page(self, page_a: Optional[RasterPage], page_b: Optional[RasterPage]) -> PageDiff:
        page_a = page_a or RasterPage.empty()
        page_b = page_b or RasterPage.empty()
        width = max(page_a.width, page_b.width)
        height = max(page_a.height, page_b.height)

        self.total_pixels += width * height
        mismatched = count_mismatched_pixels(page_a, page_b, self.threshold)
        self.total_mismatched += mismatched

        diff = PageDiff(index=len(self._pages) + 1, width=width, height=height, mismatched_pixels=mismatched)
        self._pages.append(diff)
        logger.debug("page %d: %dx%d, %d mismatched pixels", diff.index, width, height, mismatched)
        return diff

    def result(self) -> LayoutComparison:
        if self.total_pixels > 0:
            similarity = percent(self.total_pixels - self.total_mismatched, self.total_pixels)
        else:
            similarity = 100.0

        samples = []
        if self.page_count_a != self.page_count_b:
            samples.append(
                f"Different page count ({self.page_count_a} in file 1 vs {self.page_count_b} in file 2)."
            )
        if self.total_mismatched > 0:
            samples.append(f"Visual differences found in {self.total_mismatched:,} pixels across the pages.")

        return LayoutComparison(
            similarity=similarity,
            mismatched_pixel_count=self.total_mismatched,
            samples=tuple(samples),
            total_pixels=self.total_pixels,
            page_count_a=self.page_count_a,
            page_count_b=self.page_count_b,
            pages=tuple(self._pages),
        )


def compare_layout(
    pages_a: Sequence[Optional[RasterPage]],
    pages_b: Sequence[Optional[RasterPage]],
    threshold: float = DEFAULT_THRESHOLD,
) -> LayoutComparison:
    """Compare two rendered documents page by page.

    Pages are paired by position; ``None`` entries (pages that could not be
    rendered) and pages past the end of the shorter document count as 0x0.
    """
    acc = LayoutAccumulator(len(pages_a), len(pages_b), threshold=threshold)
    for i in range(max(len(pages_a), len(pages_b))):
        page_a = pages_a[i] if i < len(pages_a) else None
        page_b = pages_b[i] if i < len(pages_b) else None
        acc.add_page(page_a, page_b)
    return acc.result()
