from __future__ import annotations

from pathlib import Path
import sys

# Ensure src/ is on path
ROOT = Path(__file__).resolve().parents[1]
src_path = ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest
from PIL import Image, ImageDraw

from compare_utils.compare_layout import RasterPage

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def make_page(width: int = 100, height: int = 100, color=WHITE, square=None) -> RasterPage:
    """Solid page, optionally with a black square given as (x, y, size)."""
    img = Image.new("RGBA", (width, height), color)
    if square is not None:
        x, y, size = square
        ImageDraw.Draw(img).rectangle([x, y, x + size - 1, y + size - 1], fill=BLACK)
    return RasterPage.from_image(img)


@pytest.fixture
def white_page() -> RasterPage:
    return make_page()


@pytest.fixture
def square_page() -> RasterPage:
    return make_page(square=(40, 40, 10))
