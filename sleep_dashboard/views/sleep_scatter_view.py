from __future__ import annotations

import pandas as pd
import plotly.express as px
from plotly.graph_objs import Figure

from sleep_dashboard.core import schema
from sleep_dashboard.core.base_view import BaseView
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.core.snapshot import DashboardSnapshot


class SleepScatterView(BaseView):
    """
    Scatter of two numeric columns over the filtered subset, drawn from the
    snapshot's scatter_points.

    - X/Y from config (Sleep Duration vs Quality of Sleep by default)
    - Colour by a categorical column (Sleep Disorder by default)
    - Box-select enabled; the selection is a brush, not a filter
    """

    id = "sleep_scatter"
    label = "Sleep Duration vs Quality of Sleep"

    def __init__(self, dataset, config=None):
        super().__init__(dataset, config)
        if config is not None:
            self.x_field = config.scatter_x
            self.y_field = config.scatter_y
            self.color_field = config.scatter_color
        else:
            self.x_field = schema.SLEEP_DURATION
            self.y_field = schema.QUALITY_OF_SLEEP
            self.color_field = schema.SLEEP_DISORDER
        self.label = f"{self.x_field} vs {self.y_field}"

    def compute_data(self, snapshot: DashboardSnapshot) -> pd.DataFrame:
        columns = [self.x_field, self.y_field, self.color_field]
        return pd.DataFrame(
            [(p.x, p.y, p.category) for p in snapshot.scatter_points],
            columns=columns,
        )

    def render_figure(self, data: pd.DataFrame, state: FilterState) -> Figure:
        if data.empty:
            fig = self.empty_figure(f"{self.label} (no records match the current filters)")
            fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
            return fig

        # Stable colour per category across redraws
        category_orders = {self.color_field: self.dataset.categories(self.color_field)}

        fig = px.scatter(
            data,
            x=self.x_field,
            y=self.y_field,
            color=self.color_field,
            category_orders=category_orders,
            color_discrete_sequence=px.colors.qualitative.D3,
            title=self.label,
        )
        fig.update_traces(marker=dict(size=7, opacity=0.7))
        fig.update_layout(
            dragmode="select",
            margin=dict(l=40, r=40, t=40, b=40),
            legend_title_text=self.color_field,
        )
        return fig
