"""Alignment with an affine gap penalty (three-state Gotoh recurrence)."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from seqalign.algorithms.base import NEG_INF, DPOutcome, PairwiseAligner
from seqalign.algorithms.scoring import ScoringModel
from seqalign.algorithms.traceback import Pointer, State, trace_three_state

Table = List[List[float]]
PointerTable = List[List[int]]
Candidates = Sequence[Tuple[float, Pointer]]

# Order in which states are preferred when their scores tie at the end cell.
STATE_ORDER = (State.ALIGN, State.GAP_UP, State.GAP_LEFT)


def best_candidate(candidates: Candidates) -> Tuple[float, Pointer]:
    """Return the best score and the pointer to every predecessor achieving it.

    Candidates are (score, pointer) pairs; unreachable cells (-inf) get STOP.
    """
    best = max(score for score, _ in candidates)
    if best == NEG_INF:
        return NEG_INF, Pointer.STOP
    pointer = Pointer.combine(
        direction for score, direction in candidates if score == best
    )
    return best, pointer


class AffineGapAligner(PairwiseAligner):
    """Gotoh alignment: opening a gap costs `open`, each further position `extend`.

    States:
        ALIGN: the cell ends with seq1[j] aligned to seq2[i].
        GAP_UP: the cell ends with seq2[i] against a gap in seq1.
        GAP_LEFT: the cell ends with seq1[j] against a gap in seq2.

    A gap state is entered from ALIGN (pointer DIAGONAL) or extended from
    itself (UP or LEFT). ALIGN is entered from any state at (i-1, j-1), and
    its pointer names that state. Global and local runs have no direct move
    between the two gap states. Glocal runs allow it at the cost of opening
    the new gap, which is nothing on the last row or column, so an alignment
    made only of end gaps on both sides scores 0.
    """

    def _initialize_dp_matrices(
        self, n: int, m: int
    ) -> Tuple[List[Table], List[PointerTable]]:
        """Allocate score and pointer tables for states ALIGN, GAP_UP, GAP_LEFT."""
        fill = 0.0 if self.local else NEG_INF
        V = [[[fill] * (m + 1) for _ in range(n + 1)] for _ in STATE_ORDER]
        stop = int(Pointer.STOP)
        Psi = [[[stop] * (m + 1) for _ in range(n + 1)] for _ in STATE_ORDER]
        return V, Psi

    def _fill_boundaries(
        self, V: List[Table], Psi: List[PointerTable], n: int, m: int
    ) -> None:
        """Seed the origin and the pure gap runs along the first column and row."""
        if self.local:
            return

        V_A, V_U, V_L = V
        _, Psi_U, Psi_L = Psi
        V_A[0][0] = 0.0

        if self.glocal:
            open_score = extend_score = 0.0
        else:
            open_score = self.gaps.open_score
            extend_score = self.gaps.extend_score

        for i in range(1, n + 1):
            V_U[i][0] = open_score + (i - 1) * extend_score
            Psi_U[i][0] = Pointer.DIAGONAL if i == 1 else Pointer.UP
        for j in range(1, m + 1):
            V_L[0][j] = open_score + (j - 1) * extend_score
            Psi_L[0][j] = Pointer.DIAGONAL if j == 1 else Pointer.LEFT

    def _fill_interior(
        self,
        V: List[Table],
        Psi: List[PointerTable],
        codes1: Sequence[int],
        codes2: Sequence[int],
        substitution: List[List[float]],
        n: int,
        m: int,
    ) -> None:
        """Run the three recurrences through the interior of the grid."""
        V_A, V_U, V_L = V
        Psi_A, Psi_U, Psi_L = Psi
        open_score = self.gaps.open_score
        extend_score = self.gaps.extend_score
        local = self.local
        glocal = self.glocal

        for j in range(1, m + 1):
            row = substitution[codes1[j - 1]]
            if glocal and j == m:
                up_open = up_extend = 0.0
            else:
                up_open, up_extend = open_score, extend_score

            for i in range(1, n + 1):
                if glocal and i == n:
                    left_open = left_extend = 0.0
                else:
                    left_open, left_extend = open_score, extend_score

                up_candidates = [
                    (V_A[i - 1][j] + up_open, Pointer.DIAGONAL),
                    (V_U[i - 1][j] + up_extend, Pointer.UP),
                ]
                left_candidates = [
                    (V_A[i][j - 1] + left_open, Pointer.DIAGONAL),
                    (V_L[i][j - 1] + left_extend, Pointer.LEFT),
                ]
                if glocal:
                    # Switching gap direction opens a new gap.
                    up_candidates.append((V_L[i - 1][j] + up_open, Pointer.LEFT))
                    left_candidates.append((V_U[i][j - 1] + left_open, Pointer.UP))
                up, up_ptr = best_candidate(up_candidates)
                left, left_ptr = best_candidate(left_candidates)
                align, align_ptr = best_candidate(
                    (
                        (V_A[i - 1][j - 1], Pointer.DIAGONAL),
                        (V_U[i - 1][j - 1], Pointer.UP),
                        (V_L[i - 1][j - 1], Pointer.LEFT),
                    )
                )
                align += row[codes2[i - 1]]

                if local:
                    if up <= 0:
                        up, up_ptr = 0.0, Pointer.STOP
                    if left <= 0:
                        left, left_ptr = 0.0, Pointer.STOP
                    if align <= 0:
                        align, align_ptr = 0.0, Pointer.STOP

                V_A[i][j], Psi_A[i][j] = align, align_ptr
                V_U[i][j], Psi_U[i][j] = up, up_ptr
                V_L[i][j], Psi_L[i][j] = left, left_ptr

    def _compute_termination(
        self, V: List[Table], n: int, m: int
    ) -> Tuple[float, Tuple[int, int], State]:
        """Return the optimal score, its (row, col) cell and its state."""
        if not self.local:
            best, best_state = NEG_INF, State.ALIGN
            for state in STATE_ORDER:
                if V[state][n][m] > best:
                    best, best_state = V[state][n][m], state
            return best, (n, m), best_state

        # First maximum in fill order, states compared in STATE_ORDER.
        best, end, best_state = 0.0, (0, 0), State.ALIGN
        for j in range(1, m + 1):
            for i in range(1, n + 1):
                for state in STATE_ORDER:
                    if V[state][i][j] > best:
                        best, end, best_state = V[state][i][j], (i, j), state
        return best, end, best_state

    def run(
        self,
        codes1: Sequence[int],
        codes2: Sequence[int],
        scoring: ScoringModel,
    ) -> DPOutcome:
        """Fill the three tables, locate the optimum and trace it back."""
        n = len(codes2)
        m = len(codes1)
        substitution = scoring.matrix.tolist()

        V, Psi = self._initialize_dp_matrices(n, m)
        self._fill_boundaries(V, Psi, n, m)
        self._fill_interior(V, Psi, codes1, codes2, substitution, n, m)

        score, end, state = self._compute_termination(V, n, m)
        path = trace_three_state(Psi, end, state)

        return DPOutcome(
            raw_score=score,
            path=tuple(path),
            scores=tuple(V),
            pointers=tuple(Psi),
        )


__all__ = ["AffineGapAligner", "best_candidate"]
