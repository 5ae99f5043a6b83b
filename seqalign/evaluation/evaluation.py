"""Aggregate statistics over many alignments."""

from __future__ import annotations

import math
from statistics import fmean, pstdev
from typing import List, Optional, Sequence

from seqalign.types.alignment import AlignmentResult
from seqalign.types.evaluation import MetricResult, ScoreSummary


def _resolve_labels(labels: Optional[Sequence[str]], count: int) -> List[Optional[str]]:
    if labels is None:
        return [None] * count
    if len(labels) != count:
        raise ValueError(f"Expected {count} labels, received {len(labels)}.")
    return list(labels)


def _summarize(metric: str, per_alignment: List[MetricResult]) -> ScoreSummary:
    values = [result.value for result in per_alignment]
    count = len(values)

    if count == 0:
        mean = math.nan
        std = None
        minimum = math.nan
        maximum = math.nan
    else:
        mean = fmean(values)
        std = pstdev(values) if count > 1 else None
        minimum = min(values)
        maximum = max(values)

    return ScoreSummary(
        metric=metric,
        per_alignment=per_alignment,
        mean=mean,
        std=std,
        minimum=minimum,
        maximum=maximum,
        count=count,
    )


def summarize_scores(
    results: Sequence[AlignmentResult],
    labels: Optional[Sequence[str]] = None,
    raw: bool = False,
) -> ScoreSummary:
    """Summarize the scaled (or raw) scores of several alignment results."""
    metric = "raw_score" if raw else "score"
    per_alignment = [
        MetricResult(
            metric=metric,
            value=result.raw_score if raw else result.score,
            label=label,
        )
        for result, label in zip(results, _resolve_labels(labels, len(results)))
    ]
    return _summarize(metric, per_alignment)


__all__ = ["summarize_scores"]
