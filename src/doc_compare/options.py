"""Comparison options and their environment-driven defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from compare_utils.compare_layout import DEFAULT_THRESHOLD
from compare_utils.compare_text import DEFAULT_MAX_SAMPLES
from compare_utils.env import env_float, env_int, env_str, load_env_files
from compare_utils.extractor import DEFAULT_SCALE

RASTER_FAILURE_POLICIES = ("raise", "degrade")


@dataclass(frozen=True)
class ComparisonOptions:
    """Tunables for one comparison run.

    Attributes:
        pixel_threshold: per-pixel colour tolerance in [0, 1] (0.1 ignores
            small rendering noise, 0 counts any change).
        max_text_samples: example words listed per removed/added category.
        scale: render zoom, 1.0 = 72dpi.
        raster_failure: "raise" aborts the run when a page cannot be
            rendered; "degrade" logs a warning and treats the page as 0x0.
    """

    pixel_threshold: float = DEFAULT_THRESHOLD
    max_text_samples: int = DEFAULT_MAX_SAMPLES
    scale: float = DEFAULT_SCALE
    raster_failure: str = "raise"

    def __post_init__(self):
        if not 0.0 <= self.pixel_threshold <= 1.0:
            raise ValueError(f"pixel_threshold must be within [0, 1], got {self.pixel_threshold}")
        if self.max_text_samples < 0:
            raise ValueError(f"max_text_samples must be >= 0, got {self.max_text_samples}")
        if self.scale <= 0:
            raise ValueError(f"scale must be > 0, got {self.scale}")
        if self.raster_failure not in RASTER_FAILURE_POLICIES:
            raise ValueError(
                f"raster_failure must be one of {', '.join(RASTER_FAILURE_POLICIES)}, got {self.raster_failure!r}"
            )


def options_from_env(root: Optional[Path] = None) -> ComparisonOptions:
    """Build options from DOC_COMPARE_* variables (and .env files)."""
    load_env_files(root, force=root is not None)
    return ComparisonOptions(
        pixel_threshold=env_float("DOC_COMPARE_PIXEL_THRESHOLD", DEFAULT_THRESHOLD),
        max_text_samples=env_int("DOC_COMPARE_MAX_TEXT_SAMPLES", DEFAULT_MAX_SAMPLES),
        scale=env_float("DOC_COMPARE_SCALE", DEFAULT_SCALE),
        raster_failure=env_str("DOC_COMPARE_RASTER_FAILURE", "raise").lower(),
    )
