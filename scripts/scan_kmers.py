#!/usr/bin/env python3
"""Score every k-mer of a FASTA record against a query and write a CSV."""

from __future__ import annotations

import argparse
import logging
import sys
import warnings
from pathlib import Path

import pandas as pd

# Ensure repository modules are importable when invoked as a script
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from scripts.constants import (  # pylint: disable=C0413
    KMER_SCAN_FOLDER,
    LOG_FORMAT,
    PRECISION,
)
from seqalign import AlignmentOptions, EmptyAlignmentWarning  # pylint: disable=C0413
from seqalign.evaluation import summarize_scores  # pylint: disable=C0413
from seqalign.evaluation.metrics import identity  # pylint: disable=C0413
from seqalign.utils import load_options, read_fasta, scan_kmers  # pylint: disable=C0413

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Align each k-mer of a sequence against a query sequence."
    )
    parser.add_argument("fasta", type=Path, help="FASTA file with the target.")
    parser.add_argument("query", help="Query sequence as text.")
    parser.add_argument("-k", type=int, required=True, help="K-mer length.")
    parser.add_argument("--id", help="Record identifier to scan (default: first).")
    parser.add_argument(
        "-c", "--config", type=Path, help="YAML file with alignment options."
    )
    parser.add_argument("--mode", choices=["global", "local", "glocal"])
    parser.add_argument("-w", "--workers", type=int, help="Thread pool size.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help=f"Output CSV (default: {KMER_SCAN_FOLDER}/<record>_k<k>.csv).",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    options = load_options(args.config) if args.config else AlignmentOptions()
    if args.mode:
        options = options.replace(mode=args.mode)

    records = read_fasta(args.fasta, ids=[args.id] if args.id else None)
    identifier, sequence = next(records, (None, None))
    if identifier is None:
        raise ValueError(f"No matching record found in {args.fasta}")

    logger.info(
        "Scanning %s (%d residues) with k=%d", identifier, len(sequence), args.k
    )
    with warnings.catch_warnings():
        # Non-matching k-mers are expected in local scans.
        warnings.simplefilter("ignore", EmptyAlignmentWarning)
        hits = scan_kmers(sequence, args.query, args.k, options, args.workers)

    df = pd.DataFrame(
        [
            {
                "start": position + 1,
                "kmer": kmer,
                "score": result.score,
                "raw_score": result.raw_score,
                "seq1_start": result.start_at[0],
                "seq2_start": result.start_at[1],
                "identity": identity(result.alignment),
            }
            for position, (kmer, result) in enumerate(hits)
        ]
    )

    output = args.output or KMER_SCAN_FOLDER / f"{identifier}_k{args.k}.csv"
    output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output, index=False, float_format=f"%.{PRECISION}f")
    logger.info("Wrote %d rows to %s", len(df), output)

    summary = summarize_scores([result for _, result in hits])
    if summary.count:
        logger.info(
            "Scores: mean %.4f, min %.4f, max %.4f",
            summary.mean,
            summary.minimum,
            summary.maximum,
        )


if __name__ == "__main__":
    main()
