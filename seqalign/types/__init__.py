"""Types for the project."""

from .parameters import AlignmentMode, AlignmentOptions, Alphabet, GapPenalty
from .sequence import AminoAcidSequence, NucleotideSequence, SequenceType
from .alignment import AlignmentRecord, AlignmentResult, DPMatrices
from .evaluation import MetricResult, ScoreSummary


__all__ = [
    "Alphabet",
    "AlignmentMode",
    "AlignmentOptions",
    "GapPenalty",
    "SequenceType",
    "AminoAcidSequence",
    "NucleotideSequence",
    "AlignmentRecord",
    "AlignmentResult",
    "DPMatrices",
    "MetricResult",
    "ScoreSummary",
    "parameters",
]
