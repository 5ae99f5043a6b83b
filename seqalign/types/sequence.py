"""Sequence types."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import ClassVar, Dict, Iterable, List, Optional, Tuple, Type, Union

from seqalign.errors import (
    AlignmentError,
    InvalidAminoAcidSequences,
    InvalidNucleotideSequences,
)
from seqalign.types.parameters import Alphabet

GAP = "-"

# Symbol order defines the integer code of each residue.
AMINO_ACID_SYMBOLS = "ARNDCQEGHILKMFPSTWYVBZX*-"
NUCLEOTIDE_SYMBOLS = "ACGTRYKMSWBDHVN-"


@dataclass(frozen=True)
class SequenceType(ABC):
    """Biological sequence over a fixed, ordered alphabet of symbols."""

    identifier: str
    residues: Tuple[str, ...]
    description: Optional[str] = None

    symbols: ClassVar[str] = ""
    wildcard: ClassVar[str] = ""
    # Characters rewritten on load, e.g. "?" -> "X" for proteins.
    substitutions: ClassVar[Dict[str, str]] = {}
    # Characters kept as-is in the text but encoded as another symbol.
    code_aliases: ClassVar[Dict[str, str]] = {}
    invalid_error: ClassVar[Type[AlignmentError]] = AlignmentError

    def __post_init__(self) -> None:
        # Uppercase all residues on initialization, then validate
        uppercased = tuple(
            self.substitutions.get(res.upper(), res.upper()) for res in self.residues
        )
        object.__setattr__(self, "residues", uppercased)
        self._validate()

    def __len__(self) -> int:
        return len(self.residues)

    def __str__(self) -> str:
        class_name = self.__class__.__name__
        return (
            f"{class_name} (\n"
            f"   id: {self.identifier}\n"
            f"   description: {self.description}\n"
            f"   residues: {self.text}\n"
            f")"
        )

    @property
    def text(self) -> str:
        """Residues joined into a string."""
        return "".join(self.residues)

    @classmethod
    def from_text(
        cls,
        text: Union[str, Iterable[str]],
        identifier: str = "",
        description: Optional[str] = None,
    ) -> "SequenceType":
        """Build a sequence from raw text (or any iterable of characters)."""
        return cls(
            identifier=identifier,
            residues=tuple(text),
            description=description,
        )

    @classmethod
    def code_table(cls) -> Dict[str, int]:
        """Map every accepted character to its integer code."""
        table = {symbol: code for code, symbol in enumerate(cls.symbols)}
        for alias, target in cls.code_aliases.items():
            table[alias] = table[target]
        return table

    @classmethod
    def wildcard_code(cls) -> int:
        """Integer code of the "any" symbol."""
        return cls.symbols.index(cls.wildcard)

    def encode(self) -> List[int]:
        """Return the integer codes of the residues."""
        table = self.code_table()
        return [table[res] for res in self.residues]

    def _validate(self) -> None:
        allowed = set(self.symbols) | set(self.code_aliases)
        invalid = {ch for ch in self.residues if ch not in allowed}
        if invalid:
            raise self.invalid_error(
                f"Invalid {self.__class__.__name__} residues in '{self.identifier}': "
                f"{sorted(invalid)}; allowed: {self.symbols}"
            )


@dataclass(frozen=True)
class AminoAcidSequence(SequenceType):
    """Protein sequence; "?" (common in PDB-derived data) is read as "X"."""

    symbols: ClassVar[str] = AMINO_ACID_SYMBOLS
    wildcard: ClassVar[str] = "X"
    substitutions: ClassVar[Dict[str, str]] = {"?": "X"}
    invalid_error: ClassVar[Type[AlignmentError]] = InvalidAminoAcidSequences


@dataclass(frozen=True)
class NucleotideSequence(SequenceType):
    """DNA/RNA sequence with IUPAC ambiguity codes; "U" scores as "T"."""

    symbols: ClassVar[str] = NUCLEOTIDE_SYMBOLS
    wildcard: ClassVar[str] = "N"
    code_aliases: ClassVar[Dict[str, str]] = {"U": "T"}
    invalid_error: ClassVar[Type[AlignmentError]] = InvalidNucleotideSequences


SEQUENCE_CLASSES: Dict[Alphabet, Type[SequenceType]] = {
    Alphabet.AMINO_ACID: AminoAcidSequence,
    Alphabet.NUCLEOTIDE: NucleotideSequence,
}


def sequence_class(alphabet: Alphabet) -> Type[SequenceType]:
    """Return the sequence type used for the given alphabet."""
    return SEQUENCE_CLASSES[Alphabet.coerce(alphabet)]


__all__ = [
    "GAP",
    "AMINO_ACID_SYMBOLS",
    "NUCLEOTIDE_SYMBOLS",
    "SequenceType",
    "AminoAcidSequence",
    "NucleotideSequence",
    "sequence_class",
]
