"""K-mer extraction over sequences."""

from __future__ import annotations

import numbers
from typing import Iterator, Union

from seqalign.types.sequence import SequenceType


class KmerExtractor:
    """Lazy, restartable iterable over the k-length substrings of a sequence.

    Iterating yields the `len(sequence) - k + 1` overlapping k-mers in order
    of their start position; a sequence shorter than `k` yields nothing.
    """

    def __init__(self, sequence: Union[str, SequenceType], k: int) -> None:
        if isinstance(k, bool) or not isinstance(k, numbers.Integral) or k <= 0:
            raise ValueError(f"k must be a positive integer, got {k!r}")
        self.text = sequence.text if isinstance(sequence, SequenceType) else sequence
        self.k = int(k)

    def __len__(self) -> int:
        return max(len(self.text) - self.k + 1, 0)

    def __iter__(self) -> Iterator[str]:
        for start in range(len(self)):
            yield self.text[start : start + self.k]

    def __repr__(self) -> str:
        return f"KmerExtractor(k={self.k}, kmers={len(self)})"


__all__ = ["KmerExtractor"]
