"""Tests for the align() entry point against brute-force path enumeration."""

from __future__ import annotations

import math
import random
import warnings
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pytest
from Bio.Align import substitution_matrices

from seqalign import (
    AlignmentMode,
    AlignmentOptions,
    CellBudgetExceeded,
    EmptyAlignmentWarning,
    InvalidLengthSequences,
    align,
)
from seqalign.algorithms.scoring import ScoringModel
from seqalign.types.sequence import sequence_class

Moves = Tuple[str, ...]


def _paths(n: int, m: int) -> Iterator[Moves]:
    """Yield every monotone path from (0, 0) to (n, m) as a tuple of moves."""
    if n == 0 and m == 0:
        yield ()
        return
    if n > 0 and m > 0:
        for path in _paths(n - 1, m - 1):
            yield path + ("D",)
    if n > 0:
        for path in _paths(n - 1, m):
            yield path + ("U",)
    if m > 0:
        for path in _paths(n, m - 1):
            yield path + ("L",)


def _path_score(
    moves: Moves,
    codes1: Sequence[int],
    codes2: Sequence[int],
    scoring: ScoringModel,
    gap_open: float,
    gap_extend: Optional[float],
    free_edges: bool,
) -> float:
    """Score a full path; rows follow seq2 and columns seq1."""
    n, m = len(codes2), len(codes1)
    i = j = 0
    total = 0.0
    previous = None
    for move in moves:
        if move == "D":
            total += scoring.score(codes1[j], codes2[i])
            i += 1
            j += 1
        else:
            if move == "U":
                free = free_edges and j in (0, m)
                i += 1
            else:
                free = free_edges and i in (0, n)
                j += 1
            if not free:
                extending = gap_extend is not None and previous == move
                total -= gap_extend if extending else gap_open
        previous = move
    return total


def _brute_force(
    seq1: str,
    seq2: str,
    scoring: ScoringModel,
    gap_open: float,
    gap_extend: Optional[float] = None,
    mode: AlignmentMode = AlignmentMode.GLOBAL,
) -> float:
    """Best score over every alignment path allowed by the gap model."""
    cls = sequence_class(scoring.alphabet)
    codes1 = cls.from_text(seq1).encode()
    codes2 = cls.from_text(seq2).encode()

    def best_full(c1: List[int], c2: List[int], free_edges: bool) -> float:
        best = -math.inf
        for moves in _paths(len(c2), len(c1)):
            joined = "".join(moves)
            # Only glocal runs switch directly between the two gap states.
            affine = gap_extend is not None
            if affine and not free_edges and ("UL" in joined or "LU" in joined):
                continue
            best = max(
                best,
                _path_score(moves, c1, c2, scoring, gap_open, gap_extend, free_edges),
            )
        return best

    if mode != AlignmentMode.LOCAL:
        return best_full(codes1, codes2, mode == AlignmentMode.GLOCAL)

    best = 0.0
    for a in range(len(codes1)):
        for b in range(a + 1, len(codes1) + 1):
            for c in range(len(codes2)):
                for d in range(c + 1, len(codes2) + 1):
                    best = max(best, best_full(codes1[a:b], codes2[c:d], False))
    return best


def _plain_dp(
    codes1: Sequence[int],
    codes2: Sequence[int],
    scoring: ScoringModel,
    gap_open: float,
    gap_extend: Optional[float],
    local: bool,
) -> float:
    """Textbook Needleman-Wunsch / Smith-Waterman / Gotoh score, no traceback."""
    n, m = len(codes2), len(codes1)
    floor = 0.0 if local else -math.inf

    if gap_extend is None:
        F = [[0.0] * (m + 1) for _ in range(n + 1)]
        if not local:
            F[0] = [-gap_open * j for j in range(m + 1)]
            for i in range(1, n + 1):
                F[i][0] = -gap_open * i
        best = 0.0
        for i in range(1, n + 1):
            for j in range(1, m + 1):
                F[i][j] = max(
                    F[i - 1][j - 1] + scoring.score(codes1[j - 1], codes2[i - 1]),
                    F[i - 1][j] - gap_open,
                    F[i][j - 1] - gap_open,
                    floor,
                )
                best = max(best, F[i][j])
        return best if local else F[n][m]

    A = [[floor] * (m + 1) for _ in range(n + 1)]
    U = [[floor] * (m + 1) for _ in range(n + 1)]
    L = [[floor] * (m + 1) for _ in range(n + 1)]
    A[0][0] = 0.0
    if not local:
        for i in range(1, n + 1):
            U[i][0] = -gap_open - gap_extend * (i - 1)
        for j in range(1, m + 1):
            L[0][j] = -gap_open - gap_extend * (j - 1)
    best = 0.0
    for i in range(1, n + 1):
        for j in range(1, m + 1):
            A[i][j] = max(
                max(A[i - 1][j - 1], U[i - 1][j - 1], L[i - 1][j - 1])
                + scoring.score(codes1[j - 1], codes2[i - 1]),
                floor,
            )
            U[i][j] = max(A[i - 1][j] - gap_open, U[i - 1][j] - gap_extend, floor)
            L[i][j] = max(A[i][j - 1] - gap_open, L[i][j - 1] - gap_extend, floor)
            best = max(best, A[i][j], U[i][j], L[i][j])
    return best if local else max(A[n][m], U[n][m], L[n][m])


def _path_moves(path: Sequence[Tuple[int, int]]) -> Moves:
    return tuple(
        "D" if pos1 and pos2 else ("U" if pos2 else "L") for pos1, pos2 in path
    )


NT_PAIRS = [
    ("ACGT", "ACT"),
    ("GATT", "GCAT"),
    ("AAAC", "CA"),
    ("TGCA", "TGCA"),
    ("ACCA", "GTA"),
]
AA_PAIRS = [
    ("HEAG", "HAG"),
    ("WYK", "KWY"),
    ("PAW", "HEAE"),
]


@pytest.mark.parametrize("mode", list(AlignmentMode))
@pytest.mark.parametrize("seq1,seq2", NT_PAIRS)
def test_linear_gap_matches_brute_force_nucleotides(seq1, seq2, mode):
    """Test that linear-gap scores equal the best score over all paths."""
    options = AlignmentOptions(alphabet="NT", gap_open=4, mode=mode)
    scoring = ScoringModel.from_options(options)
    result = align(seq1, seq2, options)

    expected = _brute_force(seq1, seq2, scoring, gap_open=4, mode=mode)
    assert math.isclose(result.raw_score, expected)


@pytest.mark.parametrize("mode", list(AlignmentMode))
@pytest.mark.parametrize("seq1,seq2", AA_PAIRS)
def test_affine_gap_matches_brute_force_amino_acids(seq1, seq2, mode):
    """Test that affine-gap scores equal the best score over all paths."""
    options = AlignmentOptions(
        scoring_matrix="BLOSUM62", gap_open=10, gap_extend=1, mode=mode
    )
    scoring = ScoringModel.from_options(options)
    result = align(seq1, seq2, options)

    expected = _brute_force(
        seq1, seq2, scoring, gap_open=10, gap_extend=1, mode=mode
    )
    assert math.isclose(result.raw_score, expected)


RANDOM_ALPHABETS = [
    ("NT", "ACGT", "NUC.4.4"),
    ("AA", "ARNDCQEGHILKMFPSTWYV", "BLOSUM62"),
]


@pytest.mark.parametrize("gap_extend", [None, 1])
@pytest.mark.parametrize("mode", [AlignmentMode.GLOBAL, AlignmentMode.LOCAL])
@pytest.mark.parametrize("alphabet,letters,matrix", RANDOM_ALPHABETS)
def test_scores_match_plain_dp_on_random_pairs(
    alphabet, letters, matrix, mode, gap_extend
):
    """Test engine scores against a plain DP on random pairs of 1-12 symbols."""
    options = AlignmentOptions(
        alphabet=alphabet,
        scoring_matrix=matrix,
        gap_open=6,
        gap_extend=gap_extend,
        mode=mode,
    )
    scoring = ScoringModel.from_options(options)
    cls = sequence_class(scoring.alphabet)
    rng = random.Random(4775)

    for _ in range(25):
        seq1 = "".join(rng.choice(letters) for _ in range(rng.randint(1, 12)))
        seq2 = "".join(rng.choice(letters) for _ in range(rng.randint(1, 12)))
        expected = _plain_dp(
            cls.from_text(seq1).encode(),
            cls.from_text(seq2).encode(),
            scoring,
            6,
            gap_extend,
            mode == AlignmentMode.LOCAL,
        )
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", EmptyAlignmentWarning)
            result = align(seq1, seq2, options)
        assert math.isclose(result.raw_score, expected), (seq1, seq2)


@pytest.mark.parametrize(
    "seq1,seq2", [("T", "A"), ("TTTTT", "GAA"), ("GAA", "TTTTT"), ("ACGT", "TTGCA")]
)
def test_affine_glocal_with_extend_equal_to_open_matches_linear(seq1, seq2):
    """Test that end gaps on both sides are free in the affine glocal model."""
    linear = align(seq1, seq2, alphabet="NT", mode="glocal")
    affine = align(seq1, seq2, alphabet="NT", mode="glocal", gap_extend=8)

    assert affine.raw_score == linear.raw_score
    assert affine.alignment.ungapped() == (seq1, seq2)


def test_affine_glocal_random_pairs_match_linear():
    """Test linear and affine glocal agree when gap_extend equals gap_open."""
    rng = random.Random(31)
    for _ in range(60):
        seq1 = "".join(rng.choice("ACGT") for _ in range(rng.randint(1, 8)))
        seq2 = "".join(rng.choice("ACGT") for _ in range(rng.randint(1, 8)))
        linear = align(seq1, seq2, alphabet="NT", mode="glocal")
        affine = align(seq1, seq2, alphabet="NT", mode="glocal", gap_extend=8)
        assert affine.raw_score == linear.raw_score, (seq1, seq2)


def test_affine_glocal_end_gaps_only_alignment():
    """Test that two unrelated residues align as two free end gaps."""
    result = align("T", "A", alphabet="NT", mode="glocal", gap_extend=8)

    assert result.raw_score == 0
    assert result.alignment.rows == ("T-", "  ", "-A")
    assert result.start_at == (1, 1)


@pytest.mark.parametrize("mode", [AlignmentMode.GLOBAL, AlignmentMode.GLOCAL])
@pytest.mark.parametrize("gap_extend", [None, 2])
@pytest.mark.parametrize("seq1,seq2", NT_PAIRS)
def test_returned_path_scores_the_reported_raw_score(seq1, seq2, gap_extend, mode):
    """Test that re-scoring the traced path reproduces the raw score."""
    options = AlignmentOptions(
        alphabet="NT", gap_open=6, gap_extend=gap_extend, mode=mode
    )
    scoring = ScoringModel.from_options(options)
    result = align(seq1, seq2, options)

    cls = sequence_class(scoring.alphabet)
    rescored = _path_score(
        _path_moves(result.alignment.path),
        cls.from_text(seq1).encode(),
        cls.from_text(seq2).encode(),
        scoring,
        6,
        gap_extend,
        mode == AlignmentMode.GLOCAL,
    )
    assert math.isclose(rescored, result.raw_score)


def test_global_protein_example_score_and_rows():
    """Test the classic VSPAGMASGYD / IPGKASYD example under BLOSUM50."""
    result = align("VSPAGMASGYD", "IPGKASYD")

    assert result.raw_score == 22
    assert math.isclose(result.score, 22 / 3)
    assert result.start_at == (1, 1)
    assert result.alignment.ungapped() == ("VSPAGMASGYD", "IPGKASYD")
    assert result.alignment.columns in (11, 12)


def test_input_is_uppercased_before_alignment():
    """Test that lowercase input aligns exactly like uppercase input."""
    lower = align("vspagmasgyd", "ipgkasyd")
    upper = align("VSPAGMASGYD", "IPGKASYD")

    assert lower.raw_score == upper.raw_score
    assert lower.alignment == upper.alignment


def test_empty_sequence_is_rejected():
    """Test that an empty sequence raises InvalidLengthSequences."""
    with pytest.raises(InvalidLengthSequences):
        align("", "ACGT", alphabet="NT")

    with pytest.raises(InvalidLengthSequences):
        align("ACGT", "", alphabet="NT")


def test_local_nucleotide_self_match():
    """Test that a local self-alignment scores 5 per matching base."""
    result = align("ACGTACGT", "ACGTACGT", alphabet="NT", mode="local")

    assert result.raw_score == 40
    assert math.isclose(result.score, 40 * 0.277316)
    assert result.start_at == (1, 1)
    assert result.alignment.relation_row == "|" * 8


def test_local_alignment_reports_region_and_start():
    """Test that local mode reports the shared region and its start."""
    result = align("TTACGTTT", "GGACGGG", alphabet="NT", mode="local")

    assert result.raw_score == 15
    assert result.start_at == (3, 3)
    assert result.alignment.rows == ("ACG", "|||", "ACG")
    assert result.alignment.path == ((3, 3), (4, 4), (5, 5))


@pytest.mark.parametrize("gap_extend", [None, 1])
def test_local_alignment_without_positive_region_warns(gap_extend):
    """Test that dissimilar sequences give an empty local alignment."""
    with pytest.warns(EmptyAlignmentWarning):
        result = align(
            "AAAA", "TTTT", alphabet="NT", mode="local", gap_extend=gap_extend
        )

    assert result.score == 0
    assert result.raw_score == 0
    assert result.alignment.is_empty
    assert result.start_at == (0, 0)


def test_affine_insertion_forms_single_gap_run():
    """Test that a three-residue insertion is aligned as one affine gap."""
    seq2 = "MKTAYIAKQRQISFVKSHFSRQ"
    seq1 = seq2[:11] + "WWW" + seq2[11:]
    result = align(seq1, seq2, scoring_matrix="BLOSUM62", gap_open=10, gap_extend=1)

    blosum62 = substitution_matrices.load("BLOSUM62")
    self_scores = sum(blosum62[residue, residue] for residue in seq2)
    assert result.raw_score == self_scores - 10 - 2
    assert result.raw_score == 97
    assert math.isclose(result.score, 48.5)
    assert result.alignment.seq1_row == seq1
    assert result.alignment.seq2_row == seq2[:11] + "---" + seq2[11:]


def test_affine_model_selected_when_extend_equals_open():
    """Test that giving gap_extend switches engines even if equal to gap_open."""
    linear = align("ACGT", "AGT", alphabet="NT", return_matrices=True)
    affine = align(
        "ACGT", "AGT", alphabet="NT", gap_extend=8, return_matrices=True
    )

    assert linear.raw_score == affine.raw_score
    assert not linear.matrices.affine
    assert affine.matrices.affine


def test_linear_tie_prefers_diagonal_at_the_end():
    """Test that a diagonal move wins a tie against a gap move."""
    result = align("AA", "A", alphabet="NT")

    assert result.raw_score == 5 - 8
    assert result.alignment.rows == ("AA", " |", "-A")


def test_linear_matrices_shape_and_boundaries():
    """Test the returned simple-gap DP matrices."""
    result = align("ACGT", "ACG", alphabet="NT", return_matrices=True)
    matrices = result.matrices

    assert matrices.scores.shape == (4, 5)
    assert matrices.pointers.shape == (4, 5)
    np.testing.assert_allclose(matrices.scores[0], [0, -8, -16, -24, -32])
    np.testing.assert_allclose(matrices.scores[:, 0], [0, -8, -16, -24])
    assert matrices.pointers[0, 0] == 0
    assert matrices.pointers[1, 0] == 2
    assert matrices.pointers[0, 1] == 4
    assert matrices.scores[-1, -1] == result.raw_score


def test_affine_matrices_shape_and_boundaries():
    """Test the returned affine DP matrices (state axis last)."""
    result = align(
        "ACGT", "ACG", alphabet="NT", gap_open=5, gap_extend=2, return_matrices=True
    )
    scores = result.matrices.scores

    assert scores.shape == (4, 5, 3)
    assert result.matrices.pointers.shape == (4, 5, 3)
    assert scores[0, 0, 0] == 0
    np.testing.assert_allclose(scores[1:, 0, 1], [-5, -7, -9])
    np.testing.assert_allclose(scores[0, 1:, 2], [-5, -7, -9, -11])
    assert np.isneginf(scores[1, 0, 0])
    assert scores[-1, -1].max() == result.raw_score


def test_matrices_not_returned_by_default():
    """Test that DP matrices are only attached when requested."""
    assert align("ACGT", "ACGT", alphabet="NT").matrices is None


def test_glocal_trailing_gaps_are_free():
    """Test that glocal mode does not charge overhanging ends."""
    result = align("ACGTTTTT", "ACG", alphabet="NT", mode="glocal")

    assert result.raw_score == 15
    assert result.start_at == (1, 1)
    assert result.alignment.seq2_row == "ACG-----"


def test_glocal_leading_gaps_are_free():
    """Test that a prefix overhang costs nothing in glocal mode."""
    linear = align("TTTTACG", "ACG", alphabet="NT", mode="glocal")
    affine = align("TTTTACG", "ACG", alphabet="NT", mode="glocal", gap_extend=1)

    assert linear.raw_score == affine.raw_score == 15
    assert linear.alignment.ungapped() == ("TTTTACG", "ACG")


@pytest.mark.parametrize("mode", ["global", "glocal"])
def test_global_score_is_symmetric(mode):
    """Test that swapping sequences keeps the score with a symmetric matrix."""
    forward = align("HEAGAWGHEE", "PAWHEAE", mode=mode)
    backward = align("PAWHEAE", "HEAGAWGHEE", mode=mode)

    assert forward.raw_score == backward.raw_score


@pytest.mark.parametrize("gap_extend", [None, 2])
@pytest.mark.parametrize("mode", ["global", "local", "glocal"])
def test_alignment_is_idempotent(mode, gap_extend):
    """Test that aligning twice gives identical results."""
    first = align("HEAGAWGHEE", "PAWHEAE", mode=mode, gap_extend=gap_extend)
    second = align("HEAGAWGHEE", "PAWHEAE", mode=mode, gap_extend=gap_extend)

    assert first == second


@pytest.mark.parametrize("gap_extend", [None, 2])
def test_local_rows_are_substrings_of_inputs(gap_extend):
    """Test that local rows reproduce a contiguous region of each input."""
    seq1, seq2 = "HEAGAWGHEE", "PAWHEAE"
    result = align(seq1, seq2, mode="local", gap_extend=gap_extend)
    region1, region2 = result.alignment.ungapped()
    start1, start2 = result.start_at

    assert result.score >= 0
    assert seq1[start1 - 1 : start1 - 1 + len(region1)] == region1
    assert seq2[start2 - 1 : start2 - 1 + len(region2)] == region2


def test_scale_multiplies_raw_score():
    """Test that the user scale multiplies the matrix scale."""
    result = align("ACGT", "ACGT", alphabet="NT", scale=2)

    assert result.raw_score == 20
    assert math.isclose(result.scale, 2 * 0.277316)
    assert math.isclose(result.score, 20 * 2 * 0.277316)


def test_explicit_matrix_has_unit_scale():
    """Test alignment with an explicit numeric matrix."""
    table = np.full((4, 4), -1.0)
    np.fill_diagonal(table, 2.0)
    result = align("ACGT", "ACGA", alphabet="NT", scoring_matrix=table, gap_open=3)

    assert result.scale == 1.0
    assert result.raw_score == 2 + 2 + 2 - 1


def test_cell_budget_checked_before_alignment():
    """Test that oversized problems raise CellBudgetExceeded."""
    with pytest.raises(CellBudgetExceeded):
        align("ACGT" * 10, "ACGT" * 10, alphabet="NT", max_cells=100)

    result = align("ACGT" * 10, "ACGT" * 10, alphabet="NT", max_cells=None)
    assert result.raw_score == 200


def test_options_object_and_overrides_combine():
    """Test that keyword overrides are applied on top of an options object."""
    options = AlignmentOptions(alphabet="NT", mode="local")
    result = align("TTACGTTT", "GGACGGG", options, gapo=20)

    assert result.mode == AlignmentMode.LOCAL
    assert result.raw_score == 15
