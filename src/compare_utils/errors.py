"""Errors raised while comparing two documents."""

from __future__ import annotations

from typing import Optional


class DocCompareError(Exception):
    """Base class for failures that abort a comparison run."""


class ExtractionFailure(DocCompareError):
    """A document could not be opened or its text could not be read."""

    def __init__(self, document: str, stage: str, cause: Optional[BaseException] = None):
        self.document = document
        self.stage = stage
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{stage} failed for document {document}{detail}")


class RasterizationFailure(DocCompareError):
    """A single page could not be rendered."""

    def __init__(self, document: str, page_index: int, cause: Optional[BaseException] = None):
        self.document = document
        self.page_index = page_index
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"rendering page {page_index} failed for document {document}{detail}")


class ComparisonCancelled(DocCompareError):
    """The caller asked to stop the comparison before it finished."""
