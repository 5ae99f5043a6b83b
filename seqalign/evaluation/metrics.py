"""Statistics of a single rendered alignment."""

from __future__ import annotations

from typing import Set, Tuple

from seqalign.algorithms.traceback import MATCH_SYMBOL, SIMILAR_SYMBOL
from seqalign.types.alignment import AlignmentRecord


def _safe_divide(numerator: float, denominator: float) -> float:
    """Divide with zero-denominator protection."""
    return numerator / denominator if denominator else 0.0


def extract_aligned_pairs(alignment: AlignmentRecord) -> Set[Tuple[int, int]]:
    """Return the set of residue index pairs represented by the alignment.

    Indexing is zero-based into the full input sequences, so local alignments
    of the same inputs are comparable. Gapped positions are ignored.
    """
    return {(pos1 - 1, pos2 - 1) for pos1, pos2 in alignment.path if pos1 and pos2}


def identity(alignment: AlignmentRecord) -> float:
    """Fraction of columns holding identical residues."""
    matches = alignment.relation_row.count(MATCH_SYMBOL)
    return _safe_divide(matches, alignment.columns)


def similarity(alignment: AlignmentRecord) -> float:
    """Fraction of columns scored as identical or with a non-negative score."""
    similar = sum(
        symbol in (MATCH_SYMBOL, SIMILAR_SYMBOL) for symbol in alignment.relation_row
    )
    return _safe_divide(similar, alignment.columns)


def gap_count(alignment: AlignmentRecord) -> int:
    """Number of columns where either sequence has a gap."""
    return sum(1 for pos1, pos2 in alignment.path if not (pos1 and pos2))


__all__ = [
    "extract_aligned_pairs",
    "identity",
    "similarity",
    "gap_count",
]
