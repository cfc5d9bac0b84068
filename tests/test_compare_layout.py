from __future__ import annotations

import pytest

from compare_utils.compare_layout import (
    LayoutAccumulator,
    RasterPage,
    compare_layout,
    count_mismatched_pixels,
)
from conftest import make_page


def test_identical_sequences(white_page, square_page):
    res = compare_layout([white_page, square_page], [white_page, square_page])
    assert res.similarity == 100.0
    assert res.mismatched_pixel_count == 0
    assert res.samples == ()
    assert res.total_pixels == 20000


def test_single_square_difference(white_page, square_page):
    res = compare_layout([white_page], [square_page])
    assert res.mismatched_pixel_count == 100
    assert res.similarity == 99.0
    assert res.samples == ("Visual differences found in 100 pixels across the pages.",)


def test_square_difference_over_two_pages(white_page, square_page):
    res = compare_layout([white_page, white_page], [white_page, square_page])
    assert res.mismatched_pixel_count == 100
    assert res.similarity == 99.5
    assert [p.mismatched_pixels for p in res.pages] == [0, 100]


def test_page_count_mismatch(white_page, square_page):
    res = compare_layout([white_page, white_page, square_page], [white_page, white_page])
    assert res.samples[0] == "Different page count (3 in file 1 vs 2 in file 2)."
    assert res.similarity < 100.0
    assert res.total_pixels == 30000
    assert res.page_count_a == 3 and res.page_count_b == 2


def test_blank_extra_page_matches_padding(white_page):
    res = compare_layout([white_page, white_page, white_page], [white_page, white_page])
    assert res.similarity == 100.0
    assert res.mismatched_pixel_count == 0
    assert res.total_pixels == 30000
    assert res.samples == ("Different page count (3 in file 1 vs 2 in file 2).",)


def test_missing_page_on_either_side_is_symmetric(white_page, square_page):
    forward = compare_layout([white_page, square_page], [white_page])
    backward = compare_layout([white_page], [white_page, square_page])
    assert forward.similarity == backward.similarity
    assert forward.mismatched_pixel_count == backward.mismatched_pixel_count
    assert backward.samples[0] == "Different page count (1 in file 1 vs 2 in file 2)."


def test_no_pages_at_all():
    res = compare_layout([], [])
    assert res.similarity == 100.0
    assert res.mismatched_pixel_count == 0
    assert res.samples == ()


def test_unrendered_page_counts_as_empty(square_page):
    res = compare_layout([square_page], [None])
    assert res.total_pixels == 10000
    assert res.mismatched_pixel_count == 100
    # both documents report one page, so there is no page-count sample
    assert res.samples == ("Visual differences found in 100 pixels across the pages.",)


def test_smaller_page_is_compared_on_larger_canvas():
    big = make_page(100, 100)
    small = make_page(50, 50, square=(0, 0, 10))
    res = compare_layout([big], [small])
    assert res.total_pixels == 10000
    # transparent padding blends to white, so only the square differs
    assert res.mismatched_pixel_count == 100


def test_threshold_controls_tolerance(white_page):
    off_white = make_page(color=(250, 250, 250, 255))
    assert count_mismatched_pixels(white_page, off_white) == 0

    res = compare_layout([white_page], [off_white], threshold=0.0)
    assert res.mismatched_pixel_count == 10000
    assert res.similarity == 0.0
    assert res.samples == ("Visual differences found in 10,000 pixels across the pages.",)


def test_threshold_out_of_range(white_page):
    with pytest.raises(ValueError):
        compare_layout([white_page], [white_page], threshold=1.5)


def test_accumulator_matches_batch(white_page, square_page):
    acc = LayoutAccumulator(page_count_a=2, page_count_b=1)
    acc.add_page(white_page, square_page)
    diff = acc.add_page(square_page, None)
    assert diff.index == 2

    streamed = acc.result()
    batch = compare_layout([white_page, square_page], [square_page])
    assert streamed.similarity == batch.similarity
    assert streamed.mismatched_pixel_count == batch.mismatched_pixel_count
    assert streamed.samples == batch.samples


def test_raster_page_validation():
    with pytest.raises(ValueError):
        RasterPage(2, 2, b"\x00" * 15)
    empty = RasterPage.empty()
    assert empty.is_empty and empty.pixel_count == 0
    page = make_page(3, 2)
    assert page.to_array().shape == (2, 3, 4)
