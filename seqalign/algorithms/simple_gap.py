"""Alignment with a linear gap penalty (one score table)."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from seqalign.algorithms.base import DPOutcome, PairwiseAligner
from seqalign.algorithms.scoring import ScoringModel
from seqalign.algorithms.traceback import Pointer, trace_single_state

Table = List[List[float]]
PointerTable = List[List[int]]


class LinearGapAligner(PairwiseAligner):
    """Needleman-Wunsch / Smith-Waterman with every gap position costing `open`.

    Rows follow sequence 2 and columns follow sequence 1; the grid is filled
    column by column. Glocal runs charge nothing for gap moves along the last
    row or column, so trailing gaps are free.
    """

    def _initialize_dp_matrices(self, n: int, m: int) -> Tuple[Table, PointerTable]:
        """Allocate the score table and its pointer grid."""
        F = [[0.0] * (m + 1) for _ in range(n + 1)]
        P = [[int(Pointer.STOP)] * (m + 1) for _ in range(n + 1)]
        return F, P

    def _fill_boundaries(self, F: Table, P: PointerTable, n: int, m: int) -> None:
        """Seed the first row and column according to the mode."""
        if self.local:
            return

        gap = 0.0 if self.glocal else self.gaps.open_score
        for i in range(1, n + 1):
            F[i][0] = i * gap
            P[i][0] = Pointer.UP
        for j in range(1, m + 1):
            F[0][j] = j * gap
            P[0][j] = Pointer.LEFT

    def _fill_interior(
        self,
        F: Table,
        P: PointerTable,
        codes1: Sequence[int],
        codes2: Sequence[int],
        substitution: List[List[float]],
        n: int,
        m: int,
    ) -> None:
        """Run the recurrence over the interior of the grid."""
        gap = self.gaps.open_score
        local = self.local
        glocal = self.glocal

        for j in range(1, m + 1):
            row = substitution[codes1[j - 1]]
            up_gap = 0.0 if glocal and j == m else gap
            for i in range(1, n + 1):
                left_gap = 0.0 if glocal and i == n else gap
                up = F[i - 1][j] + up_gap
                left = F[i][j - 1] + left_gap
                diagonal = F[i - 1][j - 1] + row[codes2[i - 1]]

                # Up first, left only when strictly better, diagonal wins ties.
                best, pointer = up, Pointer.UP
                if left > best:
                    best, pointer = left, Pointer.LEFT
                if diagonal >= best:
                    best, pointer = diagonal, Pointer.DIAGONAL

                if local and best <= 0:
                    best, pointer = 0.0, Pointer.STOP
                F[i][j] = best
                P[i][j] = pointer

    def _compute_termination(
        self, F: Table, n: int, m: int
    ) -> Tuple[float, Tuple[int, int]]:
        """Return the optimal score and the (row, col) cell it is read from."""
        if not self.local:
            return F[n][m], (n, m)

        # First maximum in fill order.
        best, end = 0.0, (0, 0)
        for j in range(1, m + 1):
            for i in range(1, n + 1):
                if F[i][j] > best:
                    best, end = F[i][j], (i, j)
        return best, end

    def run(
        self,
        codes1: Sequence[int],
        codes2: Sequence[int],
        scoring: ScoringModel,
    ) -> DPOutcome:
        """Fill the table, locate the optimum and trace it back."""
        n = len(codes2)
        m = len(codes1)
        substitution = scoring.matrix.tolist()

        F, P = self._initialize_dp_matrices(n, m)
        self._fill_boundaries(F, P, n, m)
        self._fill_interior(F, P, codes1, codes2, substitution, n, m)

        score, end = self._compute_termination(F, n, m)
        path = trace_single_state(P, end)

        return DPOutcome(
            raw_score=score,
            path=tuple(path),
            scores=(F,),
            pointers=(P,),
        )


__all__ = ["LinearGapAligner"]
