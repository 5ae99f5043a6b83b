"""Independent alignments run over a thread pool."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from seqalign.algorithms.encoder import SequenceInput
from seqalign.algorithms.scoring import ScoringModel
from seqalign.align import align_with_model
from seqalign.types.alignment import AlignmentResult
from seqalign.types.parameters import AlignmentOptions
from seqalign.utils.kmers import KmerExtractor

logger = logging.getLogger(__name__)

SequencePair = Tuple[SequenceInput, SequenceInput]


def align_many(
    pairs: Iterable[SequencePair],
    options: Optional[AlignmentOptions] = None,
    max_workers: Optional[int] = None,
) -> List[AlignmentResult]:
    """Align every (seq1, seq2) pair; results keep the order of `pairs`.

    The scoring matrix is resolved once and shared by every alignment. The
    first error raised by any alignment propagates once all submitted
    alignments have finished.
    """
    if options is None:
        options = AlignmentOptions()
    scoring = ScoringModel.from_options(options)
    pairs = list(pairs)
    logger.debug("Aligning %d pairs with max_workers=%s", len(pairs), max_workers)

    def run(pair: SequencePair) -> AlignmentResult:
        return align_with_model(pair[0], pair[1], options, scoring)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(run, pairs))


def scan_kmers(
    sequence: SequenceInput,
    query: SequenceInput,
    k: int,
    options: Optional[AlignmentOptions] = None,
    max_workers: Optional[int] = None,
) -> List[Tuple[str, AlignmentResult]]:
    """Align every k-mer of `sequence` (as seq1) against `query` (as seq2).

    Returns (k-mer, result) pairs in order of the k-mer start positions.
    """
    kmers = list(KmerExtractor(sequence, k))
    results = align_many(
        ((kmer, query) for kmer in kmers), options=options, max_workers=max_workers
    )
    return list(zip(kmers, results))


__all__ = ["align_many", "scan_kmers"]
