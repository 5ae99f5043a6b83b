"""Tests for the command-line scripts."""

from __future__ import annotations

import pytest

from scripts import run_alignment

FASTA_TEXT = """>query
ACGTACGT
>target
ACG-TAC
"""


@pytest.fixture
def fasta_path(tmp_path):
    path = tmp_path / "pair.fa"
    path.write_text(FASTA_TEXT)
    return path


def test_run_alignment_prints_alignment(fasta_path, capsys):
    """Test aligning two FASTA records from the command line."""
    run_alignment.main(
        [
            "--seq1-fasta",
            str(fasta_path),
            "--seq2-fasta",
            str(fasta_path),
            "--seq2-id",
            "target",
            "-a",
            "NT",
            "--mode",
            "glocal",
        ]
    )
    output = capsys.readouterr().out

    assert "ACGTACGT" in output
    assert "Score:" in output
    assert "Start: seq1 1, seq2 1" in output


def test_run_alignment_exits_on_missing_sequence():
    """Test that a missing second sequence exits with status 1."""
    with pytest.raises(SystemExit) as excinfo:
        run_alignment.main(["ACGT"])

    assert excinfo.value.code == 1


def test_run_alignment_exits_on_missing_record(fasta_path):
    """Test that an unknown FASTA identifier exits with status 1."""
    with pytest.raises(SystemExit) as excinfo:
        run_alignment.main(
            ["--seq1-fasta", str(fasta_path), "--seq1-id", "missing", "ACGT", "ACGT"]
        )

    assert excinfo.value.code == 1


def test_run_alignment_exits_on_invalid_symbols():
    """Test that alignment errors also exit with status 1."""
    with pytest.raises(SystemExit) as excinfo:
        run_alignment.main(["ACGT", "AC1T", "-a", "NT"])

    assert excinfo.value.code == 1
