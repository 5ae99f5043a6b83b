"""Utility functions for the project."""

from .fasta import read_fasta, read_sequences
from .kmers import KmerExtractor
from .batch import align_many, scan_kmers
from .serialization import load_options, options_to_dict, result_to_dict, save_options

__all__ = [
    "read_fasta",
    "read_sequences",
    "KmerExtractor",
    "align_many",
    "scan_kmers",
    "load_options",
    "save_options",
    "options_to_dict",
    "result_to_dict",
]
