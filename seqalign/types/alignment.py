"""Alignment types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .parameters import AlignmentMode
from .sequence import GAP

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class AlignmentRecord:
    """Three-row rendering of a pairwise alignment.

    Attributes:
        seq1_row: Residues of sequence 1, "-" where sequence 1 has a gap.
        relation_row: "|" for identical residues, ":" for a non-negative
            substitution score, space otherwise.
        seq2_row: Residues of sequence 2, "-" where sequence 2 has a gap.
        path: (i1, i2) per column, 1-based into each sequence, 0 for a gap.
    """

    seq1_row: str
    relation_row: str
    seq2_row: str
    path: Tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        widths = {len(self.seq1_row), len(self.relation_row), len(self.seq2_row)}
        if len(widths) != 1:
            raise ValueError("All alignment rows must have the same length.")
        if len(self.path) != len(self.seq1_row):
            raise ValueError("Alignment path must have one entry per column.")

    @classmethod
    def empty(cls) -> "AlignmentRecord":
        """Degenerate record returned when no alignment exists."""
        return cls(seq1_row="", relation_row="", seq2_row="", path=())

    @property
    def columns(self) -> int:
        """Number of columns in the alignment."""
        return len(self.seq1_row)

    @property
    def rows(self) -> Tuple[str, str, str]:
        """The three rows, top to bottom."""
        return self.seq1_row, self.relation_row, self.seq2_row

    @property
    def is_empty(self) -> bool:
        return self.columns == 0

    def ungapped(self) -> Tuple[str, str]:
        """Return both residue rows with gap markers removed."""
        return self.seq1_row.replace(GAP, ""), self.seq2_row.replace(GAP, "")

    def __str__(self) -> str:
        return "\n".join(self.rows)


@dataclass(frozen=True)
class DPMatrices:
    """Score and back-pointer matrices of a single alignment.

    Both arrays are (len(seq2) + 1) x (len(seq1) + 1); affine runs add a last
    axis of length 3 ordered Align, GapUp, GapLeft.
    """

    scores: np.ndarray
    pointers: np.ndarray

    @property
    def affine(self) -> bool:
        return self.scores.ndim == 3


@dataclass(frozen=True)
class AlignmentResult:
    """Result of a pairwise alignment.

    Attributes:
        score: Raw score multiplied by the combined scale factor.
        raw_score: Score of the optimal path in scoring-matrix units.
        alignment: Three-row alignment record.
        start_at: 1-based (seq1, seq2) start of the alignment; (1, 1) for
            global and glocal runs, (0, 0) for an empty local alignment.
        mode: Mode the alignment was computed in.
        scale: Combined scale factor applied to the raw score.
        matrices: DP matrices, when requested.
    """

    score: float
    raw_score: float
    alignment: AlignmentRecord
    start_at: Coordinate
    mode: AlignmentMode
    scale: float = 1.0
    matrices: Optional[DPMatrices] = None


__all__ = ["Coordinate", "AlignmentRecord", "DPMatrices", "AlignmentResult"]
