"""Serialization utilities for alignment options and results (load and save)."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np
import yaml
from Bio.Align import substitution_matrices

from seqalign.algorithms.scoring import reorder_to_alphabet
from seqalign.types.alignment import AlignmentResult
from seqalign.types.parameters import AlignmentOptions


def _convert_values(value: Any, precision: int | None) -> Any:
    """
    Recursively convert dataclasses/dicts/lists/enums and optionally round floats.
    """
    if is_dataclass(value):
        return _convert_values(asdict(value), precision)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, np.ndarray):
        return _convert_values(value.tolist(), precision)
    if isinstance(value, dict):
        return {key: _convert_values(val, precision) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_convert_values(item, precision) for item in value]
    if isinstance(value, np.generic):
        return _convert_values(value.item(), precision)
    if isinstance(value, float) and precision is not None:
        return round(value, precision)
    return value


def options_to_dict(
    options: AlignmentOptions, float_precision: int | None = 6
) -> Dict[str, Any]:
    """
    Convert AlignmentOptions into a plain dictionary suitable for YAML.

    An explicit numeric scoring matrix is written out as nested lists. A
    Biopython Array is first re-indexed by the alphabet's symbol codes, so
    the lists load back as the same scoring table.
    """
    payload = {
        name: getattr(options, name)
        for name in (
            "alphabet",
            "scoring_matrix",
            "gap_open",
            "gap_extend",
            "scale",
            "mode",
            "max_cells",
            "return_matrices",
        )
    }
    matrix = payload["scoring_matrix"]
    if isinstance(matrix, Path):
        payload["scoring_matrix"] = str(matrix)
    elif isinstance(matrix, substitution_matrices.Array):
        payload["scoring_matrix"] = reorder_to_alphabet(
            matrix, options.alphabet, "<array>"
        )
    return _convert_values(payload, float_precision)


def result_to_dict(
    result: AlignmentResult,
    float_precision: int | None = 6,
    include_matrices: bool = False,
) -> Dict[str, Any]:
    """
    Convert an AlignmentResult into a plain dictionary (YAML/JSON friendly).
    """
    payload: Dict[str, Any] = {
        "score": result.score,
        "raw_score": result.raw_score,
        "scale": result.scale,
        "mode": result.mode,
        "start_at": list(result.start_at),
        "alignment": {
            "seq1": result.alignment.seq1_row,
            "relation": result.alignment.relation_row,
            "seq2": result.alignment.seq2_row,
            "path": [list(step) for step in result.alignment.path],
        },
    }
    if include_matrices and result.matrices is not None:
        payload["matrices"] = {
            "scores": result.matrices.scores,
            "pointers": result.matrices.pointers,
        }
    return _convert_values(payload, float_precision)


def load_options(yaml_path: Union[str, Path]) -> AlignmentOptions:
    """Load alignment options from a YAML file.

    Keys may sit at the top level or under an `options` mapping, and are
    resolved like keyword arguments to `seqalign.align`.
    """
    yaml_path = Path(yaml_path)
    with yaml_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}

    if not isinstance(payload, dict):
        raise ValueError(f"Expected a mapping of options in {yaml_path}.")
    options_dict = payload.get("options", payload)
    if not isinstance(options_dict, dict):
        raise ValueError(f"Expected 'options' in {yaml_path} to be a mapping.")
    return AlignmentOptions.from_mapping(options_dict)


def save_options(options: AlignmentOptions, yaml_path: Union[str, Path]) -> None:
    """Write options to YAML under an `options` key."""
    with Path(yaml_path).open("w", encoding="utf-8") as handle:
        yaml.safe_dump({"options": options_to_dict(options)}, handle, sort_keys=False)


__all__ = ["options_to_dict", "result_to_dict", "load_options", "save_options"]
