from __future__ import annotations

import pytest

from compare_utils.compare_text import compare_text, word_set
from compare_utils.rounding import percent


def test_example_pair():
    res = compare_text("alpha beta gamma", "alpha beta delta")
    assert res.similarity == 50.0
    assert res.divergence_count == 2
    assert res.samples == (
        'Removed text (examples): "gamma"',
        'Added text (examples): "delta"',
    )


@pytest.mark.parametrize(
    "a,b",
    [
        ("alpha beta gamma", "alpha beta delta"),
        ("one two three four", "four"),
        ("x", ""),
        ("a b c d e f g", "e f g h i"),
    ],
)
def test_similarity_is_symmetric(a, b):
    assert compare_text(a, b).similarity == compare_text(b, a).similarity
    assert compare_text(a, b).divergence_count == compare_text(b, a).divergence_count


def test_identical_vocabulary():
    res = compare_text("the quick brown fox", "fox  brown\nquick\tthe the")
    assert res.similarity == 100.0
    assert res.divergence_count == 0
    assert res.samples == ()


def test_disjoint_vocabulary():
    res = compare_text("red green", "blue yellow")
    assert res.similarity == 0.0
    assert res.divergence_count == 4


def test_empty_inputs():
    res = compare_text("", "")
    assert res.similarity == 100.0
    assert res.divergence_count == 0
    assert res.samples == ()

    assert compare_text("  \n\t ", "").similarity == 100.0


def test_one_side_empty():
    res = compare_text("", "only added words")
    assert res.similarity == 0.0
    assert res.divergence_count == 3
    assert res.samples == ('Added text (examples): "only", "added", "words"',)


def test_case_sensitive_tokens():
    res = compare_text("Alpha", "alpha")
    assert res.similarity == 0.0
    assert res.divergence_count == 2


def test_samples_capped_at_five_per_side():
    a = " ".join(f"a{i}" for i in range(50))
    b = " ".join(f"b{i}" for i in range(50))
    res = compare_text(a, b)
    assert res.divergence_count == 100
    removed, added = res.samples
    assert removed == 'Removed text (examples): "a0", "a1", "a2", "a3", "a4"'
    assert added == 'Added text (examples): "b0", "b1", "b2", "b3", "b4"'
    assert len(res.removed) == 50 and len(res.added) == 50


def test_max_samples_option():
    res = compare_text("a b c", "d", max_samples=2)
    assert res.samples[0] == 'Removed text (examples): "a", "b"'

    res = compare_text("a b c", "d", max_samples=0)
    assert res.samples == ()
    assert res.divergence_count == 4

    with pytest.raises(ValueError):
        compare_text("a", "b", max_samples=-1)


def test_word_set_keeps_first_occurrence_order():
    assert list(word_set("b a b c a")) == ["b", "a", "c"]


def test_rounding_is_half_up():
    # 1 shared word out of 800 distinct -> 0.125%
    a = "shared " + " ".join(f"a{i}" for i in range(400))
    b = "shared " + " ".join(f"b{i}" for i in range(399))
    assert compare_text(a, b).similarity == 0.13

    assert percent(1, 3) == 33.33
    assert percent(2, 3) == 66.67
    assert percent(1, 8) == 12.5
