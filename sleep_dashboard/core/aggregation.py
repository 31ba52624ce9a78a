from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from sleep_dashboard.core import schema


@dataclass(frozen=True)
class Bin:
    """Half-open histogram interval [lower, upper) and the number of values in it."""
    lower: int
    upper: int
    count: int

    @property
    def label(self) -> str:
        return f"{self.lower}-{self.upper - 1}"

    @property
    def bounds(self) -> Tuple[int, int]:
        return (self.lower, self.upper)

    def contains(self, value: float) -> bool:
        return self.lower <= value < self.upper


@dataclass(frozen=True)
class AggregateView:
    """Scalar summaries of one record subset."""
    n_records: int
    mean_sleep_duration: Optional[float]
    mean_quality_of_sleep: Optional[float]


def count_by(records: pd.DataFrame, key: str) -> Dict[str, int]:
    """
    Partition records by `key` and count each group.

    Categories come back in first-seen order; no sorting is applied, so equal
    counts keep the order in which their category first appears.
    """
    counts: Dict[str, int] = {}
    for value in records[key].astype(str):
        counts[value] = counts.get(value, 0) + 1
    return counts


def age_bin_edges(values: Sequence[float], bin_width: int) -> Tuple[int, int]:
    """
    Session-wide histogram domain for `values`.

    lower: minimum rounded down to a multiple of bin_width
    upper: first multiple of bin_width strictly above the maximum, so the
           maximum itself lands in the last bin
    """
    if bin_width <= 0:
        raise ValueError(f"bin_width must be positive, got {bin_width}")

    values = list(values)
    if not values:
        raise ValueError("Cannot compute bin edges for an empty sequence")

    lo, hi = min(values), max(values)
    lower = int(math.floor(lo / bin_width) * bin_width)
    upper = int((math.floor(hi / bin_width) + 1) * bin_width)
    return lower, upper


def histogram(
    records: pd.DataFrame,
    field: str,
    bin_width: int,
    lower: int,
    upper: int,
) -> List[Bin]:
    """
    Fixed-width histogram of `field` over [lower, upper).

    Bins are contiguous and non-overlapping; values outside the domain are not
    counted.
    """
    if bin_width <= 0:
        raise ValueError(f"bin_width must be positive, got {bin_width}")
    if upper <= lower:
        raise ValueError(f"upper ({upper}) must be greater than lower ({lower})")

    values = records[field]
    bins: List[Bin] = []
    for start in range(lower, upper, bin_width):
        end = min(start + bin_width, upper)
        count = int(((values >= start) & (values < end)).sum())
        bins.append(Bin(lower=start, upper=end, count=count))
    return bins


def mean(records: pd.DataFrame, field: str) -> Optional[float]:
    """Arithmetic mean of `field`, or None (never NaN or 0) for an empty subset."""
    if len(records) == 0:
        return None
    return float(records[field].mean())


def summarise(records: pd.DataFrame) -> AggregateView:
    return AggregateView(
        n_records=len(records),
        mean_sleep_duration=mean(records, schema.SLEEP_DURATION),
        mean_quality_of_sleep=mean(records, schema.QUALITY_OF_SLEEP),
    )
