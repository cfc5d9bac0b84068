"""doc_compare package

Text and layout similarity of two documents.
"""

from compare_utils.compare_layout import RasterPage  # noqa: F401
from compare_utils.errors import (  # noqa: F401
    ComparisonCancelled,
    DocCompareError,
    ExtractionFailure,
    RasterizationFailure,
)
from .options import ComparisonOptions, options_from_env  # noqa: F401
from .orchestrator import ComparisonOrchestrator, ComparisonReport, compare_documents  # noqa: F401

__version__ = "0.1.0"

__all__ = [
	"compare_documents",
	"ComparisonOrchestrator",
	"ComparisonReport",
	"ComparisonOptions",
	"options_from_env",
	"RasterPage",
	"DocCompareError",
	"ExtractionFailure",
	"RasterizationFailure",
	"ComparisonCancelled",
]
