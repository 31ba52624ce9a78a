from __future__ import annotations

from typing import List

import pandas as pd
import plotly.graph_objects as go

from sleep_dashboard.core import schema
from sleep_dashboard.core.aggregation import Bin, age_bin_edges, histogram
from sleep_dashboard.core.base_view import BaseView
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.core.snapshot import DashboardSnapshot

from .category_pie_view import DIMMED_OPACITY, FULL_OPACITY

BAR_COLOUR = "#69b3a2"


class AgeHistogramView(BaseView):
    """
    Fixed-width Age histogram.

    Bin edges and counts come from the unfiltered dataset and are computed once
    per view instance; filtering only changes which bar is emphasised, as given
    by the snapshot's bin_highlight.
    """

    id = "age_histogram"
    label = "Age Distribution"

    def __init__(self, dataset, config=None):
        super().__init__(dataset, config)
        self.bin_width = config.age_bin_width if config is not None else 5
        self.bins: List[Bin] = self._compute_bins()

    def _compute_bins(self) -> List[Bin]:
        records = self.dataset.records
        ages = records[schema.AGE]
        if ages.empty:
            return []
        lower, upper = age_bin_edges(ages.tolist(), self.bin_width)
        return histogram(records, schema.AGE, self.bin_width, lower, upper)

    def compute_data(self, snapshot: DashboardSnapshot) -> pd.DataFrame:
        highlight = snapshot.bin_highlight
        return pd.DataFrame(
            {
                "label": [b.label for b in self.bins],
                "lower": [b.lower for b in self.bins],
                "upper": [b.upper for b in self.bins],
                "count": [b.count for b in self.bins],
                "highlighted": [highlight.get(b.bounds, True) for b in self.bins],
            },
            columns=["label", "lower", "upper", "count", "highlighted"],
        )

    def render_figure(self, data: pd.DataFrame, state: FilterState) -> go.Figure:
        if data.empty:
            return self.empty_figure(f"{self.label} (no records)")

        opacity = [FULL_OPACITY if hl else DIMMED_OPACITY for hl in data["highlighted"]]

        fig = go.Figure(
            go.Bar(
                x=data["label"],
                y=data["count"],
                customdata=data[["lower", "upper"]].to_numpy(),
                marker=dict(color=BAR_COLOUR, opacity=opacity),
                hovertemplate="Age %{x}: %{y}<extra></extra>",
            )
        )
        fig.update_layout(
            title=self.label,
            bargap=0.1,
            margin=dict(l=40, r=20, t=40, b=40),
        )
        fig.update_xaxes(type="category", title_text="Age")
        fig.update_yaxes(title_text="# people", nticks=6)
        return fig
