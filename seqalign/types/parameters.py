"""
This module defines the configuration types of the alignment engine. The
AlignmentOptions structure resolves loosely spelled option names coming from
keyword arguments or YAML files.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from seqalign.errors import AmbiguousParameterName, UnknownParameterName

DEFAULT_GAP_OPEN = 8.0
DEFAULT_SCALE = 1.0
# Upper bound on (len1 + 1) * (len2 + 1) for a single alignment.
DEFAULT_MAX_CELLS = 20_000_000


class Alphabet(str, Enum):
    """Residue alphabet of the input sequences."""

    AMINO_ACID = "AA"
    NUCLEOTIDE = "NT"

    @classmethod
    def coerce(cls, value: Any) -> "Alphabet":
        """Accept an Alphabet or one of its common spellings."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace("-", "_")
        aliases = {
            "AA": cls.AMINO_ACID,
            "AMINO_ACID": cls.AMINO_ACID,
            "AMINOACID": cls.AMINO_ACID,
            "PROTEIN": cls.AMINO_ACID,
            "NT": cls.NUCLEOTIDE,
            "NUCLEOTIDE": cls.NUCLEOTIDE,
            "DNA": cls.NUCLEOTIDE,
            "RNA": cls.NUCLEOTIDE,
        }
        if key not in aliases:
            raise ValueError(
                f"alphabet must be one of {[a.value for a in cls]}, got '{value}'"
            )
        return aliases[key]


class AlignmentMode(str, Enum):
    """Alignment strategy controlling how terminal gaps are scored."""

    GLOBAL = "global"
    LOCAL = "local"
    GLOCAL = "glocal"

    @classmethod
    def coerce(cls, value: Any) -> "AlignmentMode":
        """Accept an AlignmentMode or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "")
        if key == "semiglobal":
            return cls.GLOCAL
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(
            f"mode must be one of {[m.value for m in cls]}, got '{value}'"
        )


@dataclass(frozen=True)
class GapPenalty:
    """Gap costs as positive penalties; `extend=None` selects the linear model."""

    open: float
    extend: Optional[float] = None

    @property
    def affine(self) -> bool:
        """True when a distinct extension penalty was supplied."""
        return self.extend is not None

    @property
    def open_score(self) -> float:
        """Score added when a gap run is opened."""
        return -self.open

    @property
    def extend_score(self) -> float:
        """Score added for each further position of a gap run."""
        return -(self.extend if self.extend is not None else self.open)

    def run_score(self, length: int) -> float:
        """Score of a single gap run of the given length."""
        if length <= 0:
            return 0.0
        if not self.affine:
            return length * self.open_score
        return self.open_score + (length - 1) * self.extend_score


def _check_finite(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class AlignmentOptions:
    """Typed options accepted by `seqalign.align`."""

    alphabet: Alphabet = Alphabet.AMINO_ACID
    # Name, path, Biopython Array or numeric square table; None picks the default.
    scoring_matrix: Any = field(default=None, compare=False)
    gap_open: float = DEFAULT_GAP_OPEN
    gap_extend: Optional[float] = None
    scale: float = DEFAULT_SCALE
    mode: AlignmentMode = AlignmentMode.GLOBAL
    max_cells: Optional[int] = DEFAULT_MAX_CELLS
    return_matrices: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "alphabet", Alphabet.coerce(self.alphabet))
        object.__setattr__(self, "mode", AlignmentMode.coerce(self.mode))
        object.__setattr__(self, "gap_open", _check_finite(self.gap_open, "gap_open"))
        if self.gap_extend is not None:
            object.__setattr__(
                self, "gap_extend", _check_finite(self.gap_extend, "gap_extend")
            )
        object.__setattr__(self, "scale", _check_finite(self.scale, "scale"))
        if self.max_cells is not None:
            if isinstance(self.max_cells, bool) or not isinstance(
                self.max_cells, numbers.Integral
            ):
                raise ValueError(
                    f"max_cells must be an integer, got {self.max_cells!r}"
                )
            if self.max_cells <= 0:
                raise ValueError(f"max_cells must be positive, got {self.max_cells}")
        object.__setattr__(self, "return_matrices", bool(self.return_matrices))

    @property
    def gaps(self) -> GapPenalty:
        """Gap penalty model implied by gap_open/gap_extend."""
        return GapPenalty(open=self.gap_open, extend=self.gap_extend)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AlignmentOptions":
        """Build options from loosely named keys (see `resolve_option_name`)."""
        return cls(**resolve_option_names(mapping))

    def replace(self, **changes: Any) -> "AlignmentOptions":
        """Return a copy with the given (possibly abbreviated) options changed."""
        return dataclasses.replace(self, **resolve_option_names(changes))


OPTION_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(AlignmentOptions))
# Spellings kept for compatibility with older option files.
OPTION_ALIASES: Dict[str, str] = {"extendgap": "gap_extend"}


def _normalize_name(name: str) -> str:
    return "".join(ch for ch in str(name).lower() if ch not in "_- ")


def resolve_option_name(name: str) -> str:
    """Resolve a case-insensitive, possibly abbreviated option name.

    Underscores and hyphens are ignored, an exact match wins, otherwise the
    name must be a prefix of exactly one option.
    """
    key = _normalize_name(name)
    candidates = {_normalize_name(option): option for option in OPTION_NAMES}
    candidates.update(OPTION_ALIASES)

    if not key:
        raise UnknownParameterName(f"Unknown parameter name: '{name}'")
    if key in candidates:
        return candidates[key]

    matches = sorted(
        {option for alias, option in candidates.items() if alias.startswith(key)}
    )
    if not matches:
        raise UnknownParameterName(f"Unknown parameter name: '{name}'")
    if len(matches) > 1:
        raise AmbiguousParameterName(
            f"Ambiguous parameter name: '{name}' matches {matches}"
        )
    return matches[0]


def resolve_option_names(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Resolve every key of the mapping to an AlignmentOptions field name."""
    resolved: Dict[str, Any] = {}
    for name, value in mapping.items():
        option = resolve_option_name(name)
        if option in resolved:
            raise AmbiguousParameterName(
                f"Parameter '{option}' given more than once (as '{name}')"
            )
        resolved[option] = value
    return resolved


__all__ = [
    "Alphabet",
    "AlignmentMode",
    "GapPenalty",
    "AlignmentOptions",
    "OPTION_NAMES",
    "resolve_option_name",
    "resolve_option_names",
    "DEFAULT_GAP_OPEN",
    "DEFAULT_MAX_CELLS",
]
