"""Shared interfaces for pairwise alignment algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from seqalign.algorithms.encoder import EncodedSequence
from seqalign.algorithms.scoring import ScoringModel
from seqalign.errors import CellBudgetExceeded
from seqalign.types.alignment import Coordinate, DPMatrices
from seqalign.types.parameters import DEFAULT_MAX_CELLS, AlignmentMode, GapPenalty

NEG_INF = float("-inf")

Table = List[List[float]]
PointerTable = List[List[int]]


@dataclass(frozen=True)
class DPOutcome:
    """Raw output of one DP run, before scaling and rendering.

    Attributes:
        raw_score: Optimal score in scoring-matrix units.
        path: Alignment path, (i1, i2) per column.
        scores: One score table per DP state, rows follow sequence 2.
        pointers: One back-pointer table per DP state.
    """

    raw_score: float
    path: Tuple[Coordinate, ...]
    scores: Tuple[Table, ...]
    pointers: Tuple[PointerTable, ...]

    @property
    def start(self) -> Coordinate:
        """1-based (seq1, seq2) position of the first path entry."""
        if not self.path:
            return (0, 0)
        return self.path[0]

    def to_matrices(self) -> DPMatrices:
        """Convert the DP tables into arrays; state is the last axis if > 1."""
        if len(self.scores) == 1:
            scores = np.array(self.scores[0], dtype=float)
            pointers = np.array(self.pointers[0], dtype=np.uint8)
        else:
            scores = np.stack([np.array(t, dtype=float) for t in self.scores], axis=-1)
            pointers = np.stack(
                [np.array(t, dtype=np.uint8) for t in self.pointers], axis=-1
            )
        return DPMatrices(scores=scores, pointers=pointers)


class PairwiseAligner(ABC):
    """Abstract base class for pairwise alignment algorithms.

    Args:
        gaps: Gap penalties, as positive magnitudes.
        mode: Alignment mode.
        max_cells: Upper bound on (len1 + 1) * (len2 + 1), checked before any
            table is allocated; None disables the check.
    """

    def __init__(
        self,
        gaps: GapPenalty,
        mode: AlignmentMode = AlignmentMode.GLOBAL,
        max_cells: Optional[int] = DEFAULT_MAX_CELLS,
    ) -> None:
        self.gaps = gaps
        self.mode = AlignmentMode.coerce(mode)
        self.max_cells = max_cells

    @property
    def local(self) -> bool:
        return self.mode == AlignmentMode.LOCAL

    @property
    def glocal(self) -> bool:
        return self.mode == AlignmentMode.GLOCAL

    def check_budget(self, len1: int, len2: int) -> None:
        """Raise CellBudgetExceeded if the DP grid would be too large."""
        cells = (len1 + 1) * (len2 + 1)
        if self.max_cells is not None and cells > self.max_cells:
            raise CellBudgetExceeded(
                f"Aligning sequences of length {len1} and {len2} needs {cells} "
                f"cells per table, above the limit of {self.max_cells}."
            )

    @abstractmethod
    def run(
        self,
        codes1: Sequence[int],
        codes2: Sequence[int],
        scoring: ScoringModel,
    ) -> DPOutcome:
        """Fill the DP tables for two code sequences and trace back."""
        raise NotImplementedError

    def align(
        self,
        seq1: EncodedSequence,
        seq2: EncodedSequence,
        scoring: ScoringModel,
    ) -> DPOutcome:
        """Align two encoded sequences under the scoring model."""
        self.check_budget(len(seq1), len(seq2))
        return self.run(seq1.codes, seq2.codes, scoring)


__all__ = ["PairwiseAligner", "DPOutcome", "NEG_INF"]
