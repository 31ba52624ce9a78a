from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
from plotly.colors import hex_to_rgb, qualitative

from sleep_dashboard.core import schema
from sleep_dashboard.core.aggregation import count_by
from sleep_dashboard.core.base_view import BaseView
from sleep_dashboard.core.filter_state import FACET_DISORDER, FACET_GENDER, FilterState
from sleep_dashboard.core.snapshot import DashboardSnapshot

FULL_OPACITY = 1.0
DIMMED_OPACITY = 0.3


class CategoryPieView(BaseView):
    """
    Pie chart of one categorical column over the full dataset.

    Slice sizes never change with filtering; only the slice opacity follows the
    snapshot's highlight map for this column. Each slice carries its category
    in customdata so clicks can be turned into CategoryClicked events.
    """

    column: str = None
    facet: str = None
    # DashboardSnapshot attribute holding this pie's category -> full-opacity map
    highlight_field: str = None

    def __init__(self, dataset, config=None):
        super().__init__(dataset, config)
        self.counts = count_by(self.dataset.records, self.column)

    def _colour_for(self, category: str, alpha: float) -> str:
        palette = qualitative.D3
        order = self.dataset.categories(self.column)
        idx = order.index(category) if category in order else 0
        r, g, b = hex_to_rgb(palette[idx % len(palette)])
        return f"rgba({r}, {g}, {b}, {alpha})"

    def compute_data(self, snapshot: DashboardSnapshot) -> pd.DataFrame:
        counts = self.counts
        highlight = getattr(snapshot, self.highlight_field)

        return pd.DataFrame(
            {
                "category": list(counts.keys()),
                "count": list(counts.values()),
                "highlighted": [highlight.get(c, True) for c in counts],
            },
            columns=["category", "count", "highlighted"],
        )

    def render_figure(self, data: pd.DataFrame, state: FilterState) -> go.Figure:
        if data.empty:
            return self.empty_figure(f"{self.label} (no records)")

        colours = [
            self._colour_for(c, FULL_OPACITY if hl else DIMMED_OPACITY)
            for c, hl in zip(data["category"], data["highlighted"])
        ]

        fig = go.Figure(
            go.Pie(
                labels=data["category"],
                values=data["count"],
                customdata=data["category"],
                marker=dict(colors=colours, line=dict(color="#fff", width=1)),
                textinfo="label",
                sort=False,
                direction="clockwise",
                hovertemplate="%{label}: %{value}<extra></extra>",
            )
        )
        fig.update_layout(
            title=self.label,
            showlegend=False,
            margin=dict(l=20, r=20, t=40, b=20),
        )
        return fig


class GenderPieView(CategoryPieView):
    id = "gender_pie"
    label = "Gender Distribution"
    column = schema.GENDER
    facet = FACET_GENDER
    highlight_field = "gender_highlight"


class DisorderPieView(CategoryPieView):
    id = "disorder_pie"
    label = "Sleep Disorder Distribution"
    column = schema.SLEEP_DISORDER
    facet = FACET_DISORDER
    highlight_field = "disorder_highlight"
