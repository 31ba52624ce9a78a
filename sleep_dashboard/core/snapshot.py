from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from sleep_dashboard.core import schema
from sleep_dashboard.core.aggregation import AggregateView, Bin, summarise
from sleep_dashboard.core.brush import BrushSelection, apply_brush
from sleep_dashboard.core.dataset import Dataset
from sleep_dashboard.core.filter_state import FilterState


@dataclass(frozen=True)
class ScatterPoint:
    x: float
    y: float
    category: str


@dataclass
class DashboardSnapshot:
    """
    Everything the renderer needs after one state change.

    - filtered: full dataset narrowed by every active FilterState selector
    - table: filtered, further narrowed by the brush when one is active
    - means: summaries over `table`
    - gender_highlight / disorder_highlight / bin_highlight: full-opacity flags
      keyed by category (or bin bounds); counts themselves always come from the
      full dataset
    """

    state: FilterState
    brush: Optional[BrushSelection]
    filtered: pd.DataFrame
    table: pd.DataFrame
    scatter_points: List[ScatterPoint]
    means: AggregateView
    gender_highlight: Dict[str, bool]
    disorder_highlight: Dict[str, bool]
    bin_highlight: Dict[Tuple[int, int], bool]


def category_highlight(categories: Sequence[str], selected: Optional[str]) -> Dict[str, bool]:
    return {c: selected is None or c == selected for c in categories}


def bin_highlight(bins: Sequence[Bin], selected: Optional[Tuple[int, int]]) -> Dict[Tuple[int, int], bool]:
    return {b.bounds: selected is None or b.bounds == tuple(selected) for b in bins}


def scatter_points(
    records: pd.DataFrame,
    x_field: str = schema.SLEEP_DURATION,
    y_field: str = schema.QUALITY_OF_SLEEP,
    color_field: str = schema.SLEEP_DISORDER,
) -> List[ScatterPoint]:
    return [
        ScatterPoint(x=float(x), y=float(y), category=str(c))
        for x, y, c in zip(records[x_field], records[y_field], records[color_field])
    ]


def derive_snapshot(
    dataset: Dataset,
    state: FilterState,
    bins: Sequence[Bin],
    brush: Optional[BrushSelection] = None,
    x_field: str = schema.SLEEP_DURATION,
    y_field: str = schema.QUALITY_OF_SLEEP,
    color_field: str = schema.SLEEP_DISORDER,
) -> DashboardSnapshot:
    filtered = dataset.subset_for_state(state)
    table = apply_brush(filtered, brush, x_field, y_field)

    return DashboardSnapshot(
        state=state,
        brush=brush,
        filtered=filtered,
        table=table,
        scatter_points=scatter_points(filtered, x_field, y_field, color_field),
        means=summarise(table),
        gender_highlight=category_highlight(dataset.categories(schema.GENDER), state.gender),
        disorder_highlight=category_highlight(dataset.categories(schema.SLEEP_DISORDER), state.disorder),
        bin_highlight=bin_highlight(bins, state.age_range),
    )
