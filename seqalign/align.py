"""Entry point for pairwise alignment of two sequences."""

from __future__ import annotations

import logging
import warnings
from typing import Any, Optional

from seqalign.algorithms.affine_gap import AffineGapAligner
from seqalign.algorithms.base import PairwiseAligner
from seqalign.algorithms.encoder import SequenceEncoder, SequenceInput
from seqalign.algorithms.scoring import ScoringModel
from seqalign.algorithms.simple_gap import LinearGapAligner
from seqalign.algorithms.traceback import render_alignment
from seqalign.errors import EmptyAlignmentWarning
from seqalign.types.alignment import AlignmentResult
from seqalign.types.parameters import AlignmentMode, AlignmentOptions

logger = logging.getLogger(__name__)


def make_aligner(options: AlignmentOptions) -> PairwiseAligner:
    """Pick the DP engine for the gap model in `options`."""
    gaps = options.gaps
    engine = AffineGapAligner if gaps.affine else LinearGapAligner
    return engine(gaps, mode=options.mode, max_cells=options.max_cells)


def align(
    seq1: SequenceInput,
    seq2: SequenceInput,
    options: Optional[AlignmentOptions] = None,
    **parameters: Any,
) -> AlignmentResult:
    """Align two sequences and report the scaled score and the alignment.

    Args:
        seq1: First sequence; its residues form the top row and the matrix
            columns.
        seq2: Second sequence; bottom row and matrix rows.
        options: Base options, defaults to `AlignmentOptions()`.
        **parameters: Option overrides; names may be abbreviated, see
            `seqalign.types.parameters.resolve_option_name`.

    Returns:
        The alignment result. A local alignment with no positive-scoring
        region comes back empty with score 0 and start (0, 0), after an
        `EmptyAlignmentWarning`.

    Raises:
        AlignmentError: a subclass describing the rejected input; raised
            before any DP table is allocated.
    """
    if options is None:
        options = AlignmentOptions()
    if parameters:
        options = options.replace(**parameters)

    return align_with_model(seq1, seq2, options, ScoringModel.from_options(options))


def align_with_model(
    seq1: SequenceInput,
    seq2: SequenceInput,
    options: AlignmentOptions,
    scoring: ScoringModel,
) -> AlignmentResult:
    """Align two sequences under an already resolved scoring model.

    Batch callers resolve `scoring` once from `options` and reuse it.
    """
    encoder = SequenceEncoder(options.alphabet)
    first, second = encoder.encode_pair(seq1, seq2, scoring)

    aligner = make_aligner(options)
    logger.debug(
        "Aligning %d x %d residues with %s in %s mode",
        len(first),
        len(second),
        type(aligner).__name__,
        options.mode.value,
    )
    outcome = aligner.align(first, second, scoring)
    record = render_alignment(outcome.path, first, second, scoring)

    if options.mode == AlignmentMode.LOCAL:
        start_at = outcome.start
        if record.is_empty:
            warnings.warn(
                "Local alignment found no positive-scoring region; "
                "returning an empty alignment.",
                EmptyAlignmentWarning,
                stacklevel=3,
            )
    else:
        start_at = (1, 1)

    return AlignmentResult(
        score=outcome.raw_score * scoring.scale,
        raw_score=outcome.raw_score,
        alignment=record,
        start_at=start_at,
        mode=options.mode,
        scale=scoring.scale,
        matrices=outcome.to_matrices() if options.return_matrices else None,
    )


__all__ = ["align", "align_with_model", "make_aligner"]
