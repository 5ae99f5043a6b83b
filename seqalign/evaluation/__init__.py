"""Evaluation module for the project."""

from .evaluation import summarize_scores

__all__ = [
    "summarize_scores",
    "metrics",
]
