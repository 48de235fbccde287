"""
Statistical primitives for health analytics.

This module provides correlation, grouped averaging and trend detection
over plain numeric sequences. Every function is total: degenerate input
yields a neutral result instead of an error.
"""
import math
from statistics import mean
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from src.models.analytics import Trend, TrendDirection

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

def mean_or_none(values: Iterable[Optional[float]]) -> Optional[float]:
    """
    Mean of the non-missing values, or None if there are none.

    Example:
        >>> mean_or_none([4, None, 6])
        5
    """
    present = [v for v in values if v is not None]
    return mean(present) if present else None

def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson product-moment correlation coefficient.

    Args:
        x: First series
        y: Second series, paired by position with ``x``

    Returns:
        Coefficient in [-1, 1]. ``0`` when the series differ in length, are
        empty, or either has zero variance; callers should read ``0`` as
        "no relationship or undefined".

    Example:
        >>> pearson([1, 2, 3], [2, 4, 6])
        1.0
    """
    if len(x) != len(y) or not x:
        return 0

    mean_x = mean(x)
    mean_y = mean(y)
    covariance = sum((xi - mean_x) * (yi - mean_y) for xi, yi in zip(x, y))
    spread_x = sum((xi - mean_x) ** 2 for xi in x)
    spread_y = sum((yi - mean_y) ** 2 for yi in y)
    if spread_x == 0 or spread_y == 0:
        return 0

    return covariance / math.sqrt(spread_x * spread_y)

def grouped_average(
    records: Iterable[T],
    key_fn: Callable[[T], Optional[K]],
    value_fn: Callable[[T], Optional[float]]
) -> Dict[K, float]:
    """
    Average a numeric value per derived key.

    Records whose key or value is None are skipped, so empty buckets never
    appear in the result. Buckets keep first-seen order.

    Args:
        records: Records to bucket
        key_fn: Derives the bucket (e.g. cycle phase, ``YYYY-MM``)
        value_fn: Extracts the value to average

    Returns:
        Mapping of bucket to mean value

    Example:
        >>> grouped_average(moods, lambda m: month_key(m.date), lambda m: m.mood.level)
        {'2024-01': 6.5, '2024-02': 7.0}
    """
    buckets: Dict[K, List[float]] = {}
    for record in records:
        key = key_fn(record)
        if key is None:
            continue
        value = value_fn(record)
        if value is None:
            continue
        buckets.setdefault(key, []).append(value)

    return {key: mean(values) for key, values in buckets.items()}

def half_vs_half_trend(values: Sequence[float]) -> Trend:
    """
    Compare the mean of the first half of a series with the second half.

    The split index is ``len(values) // 2``, so for odd lengths the
    second half holds the extra element.

    Args:
        values: Chronologically ordered series

    Returns:
        Trend with direction, absolute change of the means and the change as
        a percentage of the first-half mean (``0`` when that mean is ``0``)

    Example:
        >>> half_vs_half_trend([2, 2, 4, 4]).direction
        <TrendDirection.INCREASING: 'increasing'>
    """
    if len(values) < 2:
        return Trend(direction=TrendDirection.STABLE, change=0, percentage=0)

    split = len(values) // 2
    first_avg = mean(values[:split])
    second_avg = mean(values[split:])
    delta = second_avg - first_avg

    if delta > 0:
        direction = TrendDirection.INCREASING
    elif delta < 0:
        direction = TrendDirection.DECREASING
    else:
        direction = TrendDirection.STABLE

    return Trend(
        direction=direction,
        change=abs(delta),
        percentage=(delta / first_avg) * 100 if first_avg else 0
    )
