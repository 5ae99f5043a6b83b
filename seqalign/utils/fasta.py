"""Functions for working with FASTA files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import skbio.io
from skbio import Sequence as SkbioSequence

from seqalign.types.parameters import Alphabet
from seqalign.types.sequence import SequenceType, sequence_class

PathLike = Union[str, Path]

# Alignment gap symbols dropped from records read with ignore_gaps.
GAP_CHARACTERS = "-."


def _record_id(record: SkbioSequence) -> str:
    metadata = getattr(record, "metadata", {}) or {}
    return metadata.get("id") or ""


def _record_text(record: SkbioSequence, ignore_gaps: bool) -> str:
    text = str(record)
    if ignore_gaps:
        text = text.translate(str.maketrans("", "", GAP_CHARACTERS))
    return text


def read_fasta(
    file_path: PathLike,
    ids: Optional[Sequence[str]] = None,
    ignore_gaps: bool = True,
) -> Iterator[Tuple[str, str]]:
    """Yield (identifier, sequence text) pairs from a FASTA file.

    Records whose identifier is not in `ids` are skipped when `ids` is given.
    With `ignore_gaps`, gap symbols of aligned FASTA ("-" and ".") are removed.
    """
    for record in skbio.io.read(str(file_path), format="fasta"):
        identifier = _record_id(record)
        if ids and identifier not in ids:
            continue
        yield identifier, _record_text(record, ignore_gaps)


def sequence_from_skbio(
    record: SkbioSequence,
    alphabet: Alphabet = Alphabet.AMINO_ACID,
    ignore_gaps: bool = True,
) -> SequenceType:
    """Convert a scikit-bio record to the alphabet's sequence type."""
    metadata = getattr(record, "metadata", {}) or {}
    return sequence_class(alphabet).from_text(
        _record_text(record, ignore_gaps),
        identifier=_record_id(record),
        description=metadata.get("description"),
    )


def read_sequences(
    file_path: PathLike,
    alphabet: Alphabet = Alphabet.AMINO_ACID,
    ids: Optional[Sequence[str]] = None,
    ignore_gaps: bool = True,
) -> List[SequenceType]:
    """Read a FASTA file into validated sequences of the given alphabet."""
    alphabet = Alphabet.coerce(alphabet)
    sequences: List[SequenceType] = []
    for record in skbio.io.read(str(file_path), format="fasta"):
        if ids and _record_id(record) not in ids:
            continue
        sequences.append(sequence_from_skbio(record, alphabet, ignore_gaps))
    return sequences


__all__ = ["read_fasta", "read_sequences", "sequence_from_skbio"]
