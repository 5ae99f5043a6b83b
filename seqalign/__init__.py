"""Pairwise sequence alignment with linear and affine gap models."""

from .align import align
from .errors import (
    AlignmentError,
    AmbiguousParameterName,
    CellBudgetExceeded,
    EmptyAlignmentWarning,
    InvalidAminoAcidSequences,
    InvalidLengthSequences,
    InvalidNucleotideSequences,
    InvalidScoringMatrix,
    InvalidSymbolsInInputSequences,
    UnknownParameterName,
)
from .types import (
    AlignmentMode,
    AlignmentOptions,
    AlignmentRecord,
    AlignmentResult,
    Alphabet,
    GapPenalty,
)


__version__ = "0.1.0"

__all__ = [
    "align",
    "AlignmentOptions",
    "AlignmentMode",
    "Alphabet",
    "GapPenalty",
    "AlignmentRecord",
    "AlignmentResult",
    "AlignmentError",
    "InvalidLengthSequences",
    "InvalidAminoAcidSequences",
    "InvalidNucleotideSequences",
    "InvalidSymbolsInInputSequences",
    "InvalidScoringMatrix",
    "UnknownParameterName",
    "AmbiguousParameterName",
    "CellBudgetExceeded",
    "EmptyAlignmentWarning",
]
