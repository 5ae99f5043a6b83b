#!/usr/bin/env python3
"""Align two sequences (text or FASTA records) and print the alignment."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

# Ensure repository modules are importable when invoked as a script
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from scripts.constants import LOG_FORMAT, PRECISION  # pylint: disable=C0413
from seqalign import AlignmentOptions, align  # pylint: disable=C0413
from seqalign.utils import (  # pylint: disable=C0413
    load_options,
    read_fasta,
    result_to_dict,
)

logger = logging.getLogger(__name__)


def _first_record(
    path: Path, identifier: Optional[str], ignore_gaps: bool = True
) -> Tuple[str, str]:
    """Return the first FASTA record of `path`, or the one named `identifier`."""
    ids = [identifier] if identifier else None
    for record in read_fasta(path, ids=ids, ignore_gaps=ignore_gaps):
        return record
    target = f"'{identifier}'" if identifier else "any record"
    raise ValueError(f"FASTA file {path} does not contain {target}.")


def _resolve_sequence(
    text: Optional[str],
    fasta: Optional[Path],
    identifier: Optional[str],
    label: str,
    ignore_gaps: bool = True,
) -> Tuple[str, str]:
    if fasta is not None:
        return _first_record(fasta, identifier, ignore_gaps)
    if text is None:
        raise ValueError(f"Give {label} as text or with --{label}-fasta.")
    return label, text


def _build_options(args: argparse.Namespace) -> AlignmentOptions:
    options = load_options(args.config) if args.config else AlignmentOptions()
    overrides = {
        "alphabet": args.alphabet,
        "scoring_matrix": args.matrix,
        "gap_open": args.gap_open,
        "gap_extend": args.gap_extend,
        "scale": args.scale,
        "mode": args.mode,
    }
    return options.replace(
        **{name: value for name, value in overrides.items() if value is not None}
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Globally, locally or glocally align two sequences."
    )
    parser.add_argument("seq1", nargs="?", help="First sequence as text.")
    parser.add_argument("seq2", nargs="?", help="Second sequence as text.")
    parser.add_argument("--seq1-fasta", type=Path, help="FASTA file for seq1.")
    parser.add_argument("--seq2-fasta", type=Path, help="FASTA file for seq2.")
    parser.add_argument("--seq1-id", help="Record identifier to use from --seq1-fasta.")
    parser.add_argument("--seq2-id", help="Record identifier to use from --seq2-fasta.")
    parser.add_argument(
        "-c", "--config", type=Path, help="YAML file with alignment options."
    )
    parser.add_argument("-a", "--alphabet", help="AA (default) or NT.")
    parser.add_argument("-m", "--matrix", help="Scoring matrix name or file.")
    parser.add_argument("--gap-open", type=float, help="Gap open penalty.")
    parser.add_argument(
        "--gap-extend",
        type=float,
        help="Gap extension penalty; selects the affine gap model.",
    )
    parser.add_argument("--scale", type=float, help="Score scale factor.")
    parser.add_argument("--mode", choices=["global", "local", "glocal"])
    parser.add_argument(
        "-o", "--output", type=Path, help="Write the result as YAML to this file."
    )
    parser.add_argument(
        "--keep-gaps",
        action="store_true",
        help="Keep gap symbols of aligned FASTA records.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT
    )

    ignore_gaps = not args.keep_gaps
    try:
        id1, text1 = _resolve_sequence(
            args.seq1, args.seq1_fasta, args.seq1_id, "seq1", ignore_gaps
        )
        id2, text2 = _resolve_sequence(
            args.seq2, args.seq2_fasta, args.seq2_id, "seq2", ignore_gaps
        )
        options = _build_options(args)
        result = align(text1, text2, options)
    except ValueError as exc:
        # Input errors, including every AlignmentError.
        logger.error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)

    logger.info("Aligned %s (%d) with %s (%d)", id1, len(text1), id2, len(text2))
    print(result.alignment)
    print(f"\nScore: {result.score:.4f} (raw {result.raw_score:g} x {result.scale:g})")
    print(f"Start: seq1 {result.start_at[0]}, seq2 {result.start_at[1]}")

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(
                result_to_dict(result, float_precision=PRECISION),
                handle,
                sort_keys=False,
            )
        logger.info("Wrote %s", args.output)


if __name__ == "__main__":
    main()
