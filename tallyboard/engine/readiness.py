"""Pulse (readiness) summary statistics over a bounded numeric scale."""

from __future__ import annotations

import math
from collections.abc import Iterable

from tallyboard.engine.models import (
    DistributionBucket,
    ReadinessContribution,
    ReadinessSettings,
    ReadinessSummary,
)

DEFAULT_BUCKET_COUNT = 5
DEFAULT_THRESHOLD_RATIO = 0.6


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_to_step(value: float, settings: ReadinessSettings) -> int:
    return _round_half_up(value / settings.step) * settings.step


def build_buckets(scale_min: int, scale_max: int, bucket_count: int) -> list[DistributionBucket]:
    width = (scale_max - scale_min) / bucket_count
    buckets: list[DistributionBucket] = []
    for i in range(bucket_count):
        low = _round_half_up(scale_min + i * width)
        high = scale_max if i == bucket_count - 1 else _round_half_up(scale_min + (i + 1) * width) - 1
        buckets.append(DistributionBucket(range=f"{low}-{high}", count=0))
    return buckets


def _bucket_index(value: float, scale_min: int, scale_max: int, bucket_count: int) -> int:
    normalized = (value - scale_min) / (scale_max - scale_min)
    return min(math.floor(normalized * bucket_count), bucket_count - 1)


def _median(ordered: list[float]) -> float:
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return _round_half_up((ordered[mid - 1] + ordered[mid]) / 2)
    return ordered[mid]


def summarize_readiness(
    contributions: Iterable[ReadinessContribution],
    settings: ReadinessSettings | None = None,
    bucket_count: int = DEFAULT_BUCKET_COUNT,
    threshold_ratio: float = DEFAULT_THRESHOLD_RATIO,
) -> ReadinessSummary:
    """Reduce pulse values to mean, median, extremes and fixed-width buckets.

    Values are expected pre-rounded to the board's step. Missing values and
    values outside ``[scale_min, scale_max]`` are skipped. With no values
    every statistic is 0 and the buckets are empty.
    """
    settings = settings or ReadinessSettings()
    scale_min, scale_max = settings.scale_min, settings.scale_max
    assert scale_max > scale_min, "scaleMax must be greater than scaleMin"

    values = [
        c.readiness
        for c in contributions
        if c.readiness is not None and scale_min <= c.readiness <= scale_max
    ]
    counts = [0] * bucket_count
    for value in values:
        counts[_bucket_index(value, scale_min, scale_max, bucket_count)] += 1
    buckets = [
        DistributionBucket(range=bucket.range, count=count)
        for bucket, count in zip(build_buckets(scale_min, scale_max, bucket_count), counts)
    ]

    if not values:
        return ReadinessSummary(
            count=0,
            average=0,
            median=0,
            min=0,
            max=0,
            below_threshold_count=0,
            distribution_buckets=buckets,
            values=[],
        )

    ordered = sorted(values)
    threshold = scale_min + (scale_max - scale_min) * threshold_ratio
    return ReadinessSummary(
        count=len(values),
        average=_round_half_up(sum(values) / len(values)),
        median=_median(ordered),
        min=ordered[0],
        max=ordered[-1],
        below_threshold_count=sum(1 for value in values if value < threshold),
        distribution_buckets=buckets,
        values=values,
    )
