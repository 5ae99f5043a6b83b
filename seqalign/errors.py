"""Errors and warnings raised by the alignment engine."""

from __future__ import annotations


class AlignmentError(ValueError):
    """Base class for fatal alignment input errors."""


class InvalidLengthSequences(AlignmentError):
    """One of the input sequences is empty."""


class InvalidAminoAcidSequences(AlignmentError):
    """An amino-acid sequence contains symbols outside the alphabet."""


class InvalidNucleotideSequences(AlignmentError):
    """A nucleotide sequence contains symbols outside the alphabet."""


class InvalidSymbolsInInputSequences(AlignmentError):
    """A symbol code exceeds the scoring matrix and no wildcard fallback exists."""


class InvalidScoringMatrix(AlignmentError):
    """The scoring matrix could not be resolved to a numeric square table."""


class UnknownParameterName(AlignmentError):
    """An option name does not match any known option."""


class AmbiguousParameterName(AlignmentError):
    """An abbreviated option name matches more than one option."""


class CellBudgetExceeded(AlignmentError):
    """The DP matrix for the sequence pair would exceed the configured cell budget."""


class EmptyAlignmentWarning(UserWarning):
    """Local alignment found no positive-scoring region."""


__all__ = [
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
