"""Unit tests for alignment statistics and score summaries."""

from __future__ import annotations

import math

import pytest

from seqalign import align
from seqalign.evaluation import summarize_scores
from seqalign.evaluation.metrics import (
    extract_aligned_pairs,
    gap_count,
    identity,
    similarity,
)
from seqalign.types import AlignmentRecord


def _record(top: str, middle: str, bottom: str) -> AlignmentRecord:
    path = []
    pos1 = pos2 = 0
    for res1, res2 in zip(top, bottom):
        pos1 += res1 != "-"
        pos2 += res2 != "-"
        path.append((pos1 if res1 != "-" else 0, pos2 if res2 != "-" else 0))
    return AlignmentRecord(top, middle, bottom, tuple(path))


GAPPED = _record("AC-GT", "|  | ", "A-TGA")
UNGAPPED = _record("ACGT", "| | ", "ATGA")


def test_extract_aligned_pairs_skips_gaps():
    """Test that only columns pairing two residues are reported, zero-based."""
    assert extract_aligned_pairs(GAPPED) == {(0, 0), (2, 2), (3, 3)}
    assert extract_aligned_pairs(UNGAPPED) == {(0, 0), (1, 1), (2, 2), (3, 3)}


def test_identity_similarity_and_gaps():
    """Test column statistics of a single alignment."""
    record = _record("IKW-", ":|  ", "VKGA")

    assert identity(record) == 0.25
    assert similarity(record) == 0.5
    assert gap_count(record) == 1
    assert gap_count(GAPPED) == 2
    assert identity(AlignmentRecord.empty()) == 0.0


def test_statistics_of_a_computed_alignment():
    """Test statistics read off an alignment returned by align()."""
    result = align("TTACGTTT", "GGACGGG", alphabet="NT", mode="local")

    assert identity(result.alignment) == 1.0
    assert similarity(result.alignment) == 1.0
    assert gap_count(result.alignment) == 0
    assert extract_aligned_pairs(result.alignment) == {(2, 2), (3, 3), (4, 4)}


def test_summarize_scores():
    """Test aggregate statistics over alignment results."""
    results = [
        align("ACGT", "ACGT", alphabet="NT"),
        align("ACGT", "AGT", alphabet="NT"),
    ]
    summary = summarize_scores(results, labels=["same", "deletion"], raw=True)

    assert summary.metric == "raw_score"
    assert summary.count == 2
    assert summary.minimum == 7
    assert summary.maximum == 20
    assert summary.mean == 13.5
    assert summary.std == 6.5
    assert [item.label for item in summary.per_alignment] == ["same", "deletion"]


def test_summarize_scores_edge_cases():
    """Test empty input and mismatched labels."""
    summary = summarize_scores([])
    assert summary.count == 0
    assert math.isnan(summary.mean)
    assert summary.std is None

    with pytest.raises(ValueError):
        summarize_scores([align("ACGT", "ACGT", alphabet="NT")], labels=["a", "b"])
