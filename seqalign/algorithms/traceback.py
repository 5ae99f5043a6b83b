"""Back-pointer variants, traceback walks and alignment rendering.

Pointers are small bit sets over the three moves of the DP grid:
    - DIAGONAL: from (i-1, j-1), consumes one symbol of each sequence
    - UP: from (i-1, j), consumes a symbol of sequence 2 only
    - LEFT: from (i, j-1), consumes a symbol of sequence 1 only

Rows of the grid follow sequence 2 and columns follow sequence 1. A tie in
the forward pass is stored as a composite pointer; traceback resolves it in
the fixed order DIAGONAL, UP, LEFT.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple

from seqalign.algorithms.encoder import EncodedSequence
from seqalign.algorithms.scoring import ScoringModel
from seqalign.types.alignment import AlignmentRecord, Coordinate
from seqalign.types.sequence import GAP

MATCH_SYMBOL = "|"
SIMILAR_SYMBOL = ":"
BLANK_SYMBOL = " "


class Pointer(IntEnum):
    """Back-pointer stored per DP cell (and per state in the affine model)."""

    STOP = 0
    DIAGONAL = 1
    UP = 2
    DIAGONAL_OR_UP = 3
    LEFT = 4
    DIAGONAL_OR_LEFT = 5
    UP_OR_LEFT = 6
    ALL = 7

    @classmethod
    def combine(cls, directions: Iterable["Pointer"]) -> "Pointer":
        """Merge tied single directions into one composite pointer."""
        value = 0
        for direction in directions:
            value |= direction
        return cls(value)

    def resolve(self) -> "Pointer":
        """Return the single direction traceback follows for this pointer."""
        for direction in RESOLUTION_ORDER:
            if self & direction:
                return direction
        return Pointer.STOP


RESOLUTION_ORDER: Tuple[Pointer, Pointer, Pointer] = (
    Pointer.DIAGONAL,
    Pointer.UP,
    Pointer.LEFT,
)


class State(IntEnum):
    """DP states of the affine-gap model."""

    ALIGN = 0
    GAP_UP = 1
    GAP_LEFT = 2


# In the affine model a pointer names the state of the predecessor cell.
DIRECTION_STATES = {
    Pointer.DIAGONAL: State.ALIGN,
    Pointer.UP: State.GAP_UP,
    Pointer.LEFT: State.GAP_LEFT,
}


def trace_single_state(
    pointers: Sequence[Sequence[int]], end: Tuple[int, int]
) -> List[Coordinate]:
    """Follow simple-gap pointers from `end` (row, col) until a STOP pointer."""
    i, j = end
    path: List[Coordinate] = []

    while True:
        direction = Pointer(pointers[i][j]).resolve()
        if direction == Pointer.STOP:
            break
        if direction == Pointer.DIAGONAL:
            path.append((j, i))
            i -= 1
            j -= 1
        elif direction == Pointer.UP:
            path.append((0, i))
            i -= 1
        else:  # direction == Pointer.LEFT
            path.append((j, 0))
            j -= 1

    path.reverse()
    return path


def trace_three_state(
    pointers: Sequence[Sequence[Sequence[int]]],
    end: Tuple[int, int],
    state: State,
) -> List[Coordinate]:
    """Follow affine-gap pointers from `end` in `state` until a STOP pointer.

    `pointers` is indexed by state, then row, then column. The move out of a
    cell is fixed by its state; the pointer picks the predecessor's state.
    """
    i, j = end
    path: List[Coordinate] = []

    while True:
        direction = Pointer(pointers[state][i][j]).resolve()
        if direction == Pointer.STOP:
            break
        if state == State.ALIGN:
            path.append((j, i))
            i -= 1
            j -= 1
        elif state == State.GAP_UP:
            path.append((0, i))
            i -= 1
        else:  # state == State.GAP_LEFT
            path.append((j, 0))
            j -= 1
        state = DIRECTION_STATES[direction]

    path.reverse()
    return path


def _relation(
    code1: int,
    code2: int,
    scoring: ScoringModel,
) -> str:
    if not (scoring.covers(code1) and scoring.covers(code2)):
        return BLANK_SYMBOL
    if code1 == code2:
        return MATCH_SYMBOL
    if scoring.score(code1, code2) >= 0:
        return SIMILAR_SYMBOL
    return BLANK_SYMBOL


def render_alignment(
    path: Sequence[Coordinate],
    seq1: EncodedSequence,
    seq2: EncodedSequence,
    scoring: ScoringModel,
) -> AlignmentRecord:
    """Render a path as the three-row alignment record.

    The relation row compares the codes of the residues as written, so
    symbols beyond the matrix (e.g. gap characters in the input) stay blank
    even though the DP scored them as the wildcard.
    """
    if not path:
        return AlignmentRecord.empty()

    top: List[str] = []
    middle: List[str] = []
    bottom: List[str] = []

    for pos1, pos2 in path:
        top.append(seq1.residues[pos1 - 1] if pos1 else GAP)
        bottom.append(seq2.residues[pos2 - 1] if pos2 else GAP)
        if pos1 and pos2:
            middle.append(
                _relation(seq1.raw_codes[pos1 - 1], seq2.raw_codes[pos2 - 1], scoring)
            )
        else:
            middle.append(BLANK_SYMBOL)

    return AlignmentRecord(
        seq1_row="".join(top),
        relation_row="".join(middle),
        seq2_row="".join(bottom),
        path=tuple(path),
    )


__all__ = [
    "Pointer",
    "State",
    "RESOLUTION_ORDER",
    "trace_single_state",
    "trace_three_state",
    "render_alignment",
]
