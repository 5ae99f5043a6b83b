"""Scoring model: substitution matrix resolution and score scaling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
from Bio.Align import substitution_matrices

from seqalign.errors import InvalidScoringMatrix
from seqalign.types.parameters import AlignmentOptions, Alphabet
from seqalign.types.sequence import sequence_class

logger = logging.getLogger(__name__)

DEFAULT_MATRICES: Dict[Alphabet, str] = {
    Alphabet.AMINO_ACID: "BLOSUM50",
    Alphabet.NUCLEOTIDE: "NUC.4.4",
}
MATRIX_ALIASES: Dict[str, str] = {"NUC44": "NUC.4.4"}

# Bits per matrix unit, for the named matrices that document one.
INTRINSIC_SCALES: Dict[str, float] = {
    "BLOSUM45": 1.0 / 3.0,
    "BLOSUM50": 1.0 / 3.0,
    "BLOSUM62": 0.5,
    "PAM250": 1.0 / 3.0,
    "NUC.4.4": 0.277316,
}


def available_matrices() -> Dict[str, str]:
    """Map upper-cased names of the bundled matrices to their canonical names."""
    names = {name.upper(): name for name in substitution_matrices.load()}
    for alias, target in MATRIX_ALIASES.items():
        if target.upper() in names:
            names[alias] = names[target.upper()]
    return names


def reorder_to_alphabet(
    array: substitution_matrices.Array, alphabet: Alphabet, source: str
) -> np.ndarray:
    """Re-index a lettered matrix by the integer codes of the alphabet.

    The result covers the longest prefix of the code order present in the
    matrix; codes past it are handled by the encoder's wildcard remapping.
    """
    symbols = sequence_class(alphabet).symbols
    if array.ndim != 2:
        raise InvalidScoringMatrix(f"Scoring matrix '{source}' is not two-dimensional.")

    size = 0
    for symbol in symbols:
        if symbol not in array.alphabet:
            break
        size += 1
    if size == 0:
        raise InvalidScoringMatrix(
            f"Scoring matrix '{source}' does not cover the {alphabet.value} alphabet."
        )

    covered = symbols[:size]
    return np.array(
        [[float(array[a, b]) for b in covered] for a in covered], dtype=float
    )


def _as_square_table(value: Any, source: str) -> np.ndarray:
    """Validate an explicit numeric table."""
    try:
        table = np.array(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidScoringMatrix(
            f"Scoring matrix {source} is not a numeric table."
        ) from exc

    if table.ndim != 2 or table.shape[0] != table.shape[1] or table.shape[0] == 0:
        raise InvalidScoringMatrix(
            f"Scoring matrix {source} must be a non-empty square table, "
            f"got shape {table.shape}."
        )
    if not np.all(np.isfinite(table)):
        raise InvalidScoringMatrix(f"Scoring matrix {source} has non-finite entries.")
    return table


def _load_named(name: str, alphabet: Alphabet) -> Tuple[np.ndarray, str]:
    names = available_matrices()
    key = name.strip().upper()
    if key in names:
        canonical = names[key]
        array = substitution_matrices.load(canonical)
        return reorder_to_alphabet(array, alphabet, canonical), canonical

    path = Path(name)
    if path.is_file():
        try:
            array = substitution_matrices.read(str(path))
        except (OSError, ValueError, KeyError) as exc:
            raise InvalidScoringMatrix(
                f"Could not read scoring matrix file '{path}'."
            ) from exc
        return reorder_to_alphabet(array, alphabet, str(path)), path.name

    raise InvalidScoringMatrix(
        f"Unknown scoring matrix '{name}'; choose from {sorted(set(names.values()))} "
        "or give a matrix file."
    )


@dataclass(frozen=True, eq=False)
class ScoringModel:
    """Resolved substitution matrix plus the scale applied to raw scores.

    The matrix is indexed by integer symbol codes, seq1 code first.
    """

    matrix: np.ndarray
    alphabet: Alphabet
    name: Optional[str] = None
    intrinsic_scale: float = 1.0
    user_scale: float = 1.0

    def __post_init__(self) -> None:
        matrix = np.array(self.matrix, dtype=float)
        matrix.flags.writeable = False
        object.__setattr__(self, "matrix", matrix)

    @property
    def size(self) -> int:
        """Number of symbol codes the matrix can score."""
        return self.matrix.shape[0]

    @property
    def scale(self) -> float:
        """Combined scale: user-supplied times matrix-intrinsic."""
        return self.user_scale * self.intrinsic_scale

    def score(self, code1: int, code2: int) -> float:
        """Substitution score of a seq1 code against a seq2 code."""
        return self.matrix[code1, code2]

    def covers(self, code: int) -> bool:
        return 0 <= code < self.size

    @classmethod
    def resolve(
        cls,
        alphabet: Alphabet = Alphabet.AMINO_ACID,
        scoring_matrix: Any = None,
        scale: float = 1.0,
    ) -> "ScoringModel":
        """Resolve a matrix selector into a concrete scoring model.

        Args:
            alphabet: Alphabet of the sequences to score.
            scoring_matrix: None for the alphabet default, a matrix name, a
                path to an NCBI-format matrix file, a Biopython Array, or an
                explicit numeric square table indexed by symbol code.
            scale: User scale factor, multiplied by the matrix's own scale.

        Raises:
            InvalidScoringMatrix: if the selector does not resolve to a
                numeric square table.
        """
        alphabet = Alphabet.coerce(alphabet)
        if scoring_matrix is None:
            scoring_matrix = DEFAULT_MATRICES[alphabet]

        if isinstance(scoring_matrix, (str, Path)):
            matrix, name = _load_named(str(scoring_matrix), alphabet)
        elif isinstance(scoring_matrix, substitution_matrices.Array):
            matrix = reorder_to_alphabet(scoring_matrix, alphabet, "<array>")
            name = None
        else:
            matrix = _as_square_table(scoring_matrix, "<explicit>")
            name = None

        intrinsic = INTRINSIC_SCALES.get(name.upper(), 1.0) if name else 1.0
        logger.debug(
            "Resolved scoring matrix %s (%dx%d), scale %s x %s",
            name or "<explicit>",
            matrix.shape[0],
            matrix.shape[1],
            scale,
            intrinsic,
        )
        return cls(
            matrix=matrix,
            alphabet=alphabet,
            name=name,
            intrinsic_scale=intrinsic,
            user_scale=scale,
        )

    @classmethod
    def from_options(cls, options: AlignmentOptions) -> "ScoringModel":
        return cls.resolve(options.alphabet, options.scoring_matrix, options.scale)


__all__ = [
    "ScoringModel",
    "DEFAULT_MATRICES",
    "INTRINSIC_SCALES",
    "available_matrices",
    "reorder_to_alphabet",
]
