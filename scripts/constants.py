"""Constants for the project."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

# ============================================================================
# Data directories
# ============================================================================
DATA_FOLDER = PROJECT_ROOT / "data"
FASTA_FOLDER = DATA_FOLDER / "fasta"

# ============================================================================
# Results directories
# ============================================================================
RESULTS_FOLDER = PROJECT_ROOT / "results"

# Alignment results (YAML files from run_alignment.py)
ALIGNMENTS_FOLDER = RESULTS_FOLDER / "alignments"

# K-mer scan tables (CSV files from scan_kmers.py)
KMER_SCAN_FOLDER = RESULTS_FOLDER / "kmer_scans"

# ============================================================================
# Output formatting
# ============================================================================
PRECISION = 6
LOG_FORMAT = "[%(levelname)s] %(message)s"
