"""
Text comparison utilities.

- compare_text(text_a, text_b) scores two documents by vocabulary overlap
  (Jaccard index over their distinct whitespace-delimited words)
- words are compared case-sensitively, by exact string match
- returns a TextComparison with similarity %, divergence count and a few
  example words that were removed from A or added in B
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from compare_utils.rounding import percent

DEFAULT_MAX_SAMPLES = 5


@dataclass(frozen=True)
class TextComparison:
    similarity: float
    divergence_count: int
    samples: Tuple[str, ...] = ()
    removed: Tuple[str, ...] = field(default=(), repr=False)
    added: Tuple[str, ...] = field(default=(), repr=False)


def word_set(text: str) -> Dict[str, None]:
    """Distinct non-empty tokens of ``text`` in first-occurrence order.

    A dict is used as an insertion-ordered set so that divergence samples
    come out in document order and stay reproducible between runs.
    """
    return dict.fromkeys(text.split())


def _format_sample(label: str, words: Iterable[str]) -> str:
    quoted = '", "'.join(words)
    return f'{label} text (examples): "{quoted}"'


def compare_text(text_a: str, text_b: str, max_samples: int = DEFAULT_MAX_SAMPLES) -> TextComparison:
    """Compare two texts by the overlap of their word sets.

    Similarity is ``|A & B| / |A | B| * 100`` rounded to two decimals;
    two empty texts are 100% similar with no divergences.
    """
    if max_samples < 0:
        raise ValueError(f"max_samples must be >= 0, got {max_samples}")

    words_a = word_set(text_a)
    words_b = word_set(text_b)

    removed = tuple(w for w in words_a if w not in words_b)
    added = tuple(w for w in words_b if w not in words_a)
    common = len(words_a) - len(removed)
    union = common + len(removed) + len(added)

    similarity = 100.0 if union == 0 else percent(common, union)

    samples = []
    if removed and max_samples:
        samples.append(_format_sample("Removed", removed[:max_samples]))
    if added and max_samples:
        samples.append(_format_sample("Added", added[:max_samples]))

    return TextComparison(
        similarity=similarity,
        divergence_count=len(removed) + len(added),
        samples=tuple(samples),
        removed=removed,
        added=added,
    )
