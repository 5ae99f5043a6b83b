"""Evaluation result data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class MetricResult:
    """Metric outcome for a single alignment instance."""

    metric: str
    value: float
    label: Optional[str]


@dataclass(frozen=True)
class ScoreSummary:
    """Aggregate statistics over the values of one metric."""

    metric: str
    per_alignment: List[MetricResult]
    mean: float
    std: Optional[float]
    minimum: float
    maximum: float
    count: int


__all__ = ["MetricResult", "ScoreSummary"]
