"""Algorithms for the project."""

from .scoring import ScoringModel
from .encoder import EncodedSequence, SequenceEncoder
from .base import DPOutcome, PairwiseAligner
from .simple_gap import LinearGapAligner
from .affine_gap import AffineGapAligner
from .traceback import Pointer, State, render_alignment


__all__ = [
    "ScoringModel",
    "SequenceEncoder",
    "EncodedSequence",
    "PairwiseAligner",
    "DPOutcome",
    "LinearGapAligner",
    "AffineGapAligner",
    "Pointer",
    "State",
    "render_alignment",
    "scoring",
    "traceback",
]
