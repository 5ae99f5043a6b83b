"""Sequence encoding into the integer symbol codes of a scoring matrix."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from seqalign.algorithms.scoring import ScoringModel
from seqalign.errors import InvalidLengthSequences, InvalidSymbolsInInputSequences
from seqalign.types.parameters import Alphabet
from seqalign.types.sequence import SequenceType, sequence_class

logger = logging.getLogger(__name__)

SequenceInput = Union[str, SequenceType, Iterable[str]]


@dataclass(frozen=True)
class EncodedSequence:
    """A validated sequence with the codes used by the DP and for rendering.

    Attributes:
        sequence: Uppercased, validated sequence.
        codes: Codes looked up in the scoring matrix (wildcard-remapped).
        raw_codes: Codes before remapping; used to decide which alignment
            columns can be scored when rendering.
    """

    sequence: SequenceType
    codes: Tuple[int, ...]
    raw_codes: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.codes)

    @property
    def residues(self) -> Tuple[str, ...]:
        return self.sequence.residues


class SequenceEncoder:
    """Validates sequences against an alphabet and encodes them for a matrix."""

    def __init__(self, alphabet: Alphabet = Alphabet.AMINO_ACID) -> None:
        self.alphabet = Alphabet.coerce(alphabet)
        self.sequence_cls = sequence_class(self.alphabet)

    def to_sequence(self, value: SequenceInput, identifier: str = "") -> SequenceType:
        """Build (and validate) the alphabet's sequence type from the input."""
        if isinstance(value, self.sequence_cls):
            return value
        if isinstance(value, SequenceType):
            return self.sequence_cls(
                identifier=value.identifier,
                residues=value.residues,
                description=value.description,
            )
        return self.sequence_cls.from_text(value, identifier=identifier)

    def fit_to_matrix(self, codes: List[int], scoring: ScoringModel) -> List[int]:
        """Remap codes the matrix cannot score onto the wildcard code.

        Raises:
            InvalidSymbolsInInputSequences: if a code is out of range and the
                matrix does not cover the wildcard either.
        """
        if not codes or max(codes) < scoring.size:
            return codes

        wildcard = self.sequence_cls.wildcard_code()
        if not scoring.covers(wildcard):
            raise InvalidSymbolsInInputSequences(
                f"Sequence symbols exceed the {scoring.size}x{scoring.size} scoring "
                f"matrix, which has no '{self.sequence_cls.wildcard}' entry to "
                "fall back on."
            )
        return [code if code < scoring.size else wildcard for code in codes]

    def encode_pair(
        self,
        seq1: SequenceInput,
        seq2: SequenceInput,
        scoring: ScoringModel,
    ) -> Tuple[EncodedSequence, EncodedSequence]:
        """Validate and encode both sequences of an alignment.

        Raises:
            InvalidAminoAcidSequences, InvalidNucleotideSequences: on
                characters outside the alphabet.
            InvalidLengthSequences: if either sequence is empty.
            InvalidSymbolsInInputSequences: see `fit_to_matrix`.
        """
        first = self.to_sequence(seq1, identifier="seq1")
        second = self.to_sequence(seq2, identifier="seq2")

        if len(first) == 0 or len(second) == 0:
            raise InvalidLengthSequences(
                f"Sequences must not be empty (lengths {len(first)} and {len(second)})."
            )

        raw1 = first.encode()
        raw2 = second.encode()
        codes1 = self.fit_to_matrix(raw1, scoring)
        codes2 = self.fit_to_matrix(raw2, scoring)
        logger.debug(
            "Encoded sequences of length %d and %d for a %d-symbol matrix",
            len(raw1),
            len(raw2),
            scoring.size,
        )
        return (
            EncodedSequence(first, tuple(codes1), tuple(raw1)),
            EncodedSequence(second, tuple(codes2), tuple(raw2)),
        )


__all__ = ["SequenceEncoder", "EncodedSequence", "SequenceInput"]
