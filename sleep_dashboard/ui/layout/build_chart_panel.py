from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from sleep_dashboard.core.base_view import BaseView
from sleep_dashboard.core.snapshot import DashboardSnapshot
from sleep_dashboard.ui.ids import graph_id

SMALL_CHART_HEIGHT = "320px"
SCATTER_HEIGHT = "420px"

GRAPH_CONFIG = {"responsive": True, "displaylogo": False}

# Lasso selections have no box range and would read as an empty brush
SCATTER_GRAPH_CONFIG = {**GRAPH_CONFIG, "modeBarButtonsToRemove": ["lasso2d"]}


def _chart_card(view: BaseView, snapshot: DashboardSnapshot, height: str, config: dict) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(html.Strong(view.label), className="p-2"),
            dbc.CardBody(
                dcc.Graph(
                    id=graph_id(view.id),
                    figure=view.figure(snapshot),
                    style={"height": height},
                    config=config,
                ),
                className="p-1",
            ),
        ],
        className="sd-chart-card h-100",
    )


def build_chart_panel(views: List[BaseView], snapshot: DashboardSnapshot) -> html.Div:
    """
    Category charts on the top row, the scatter plot (if registered) below.

    Initial figures are rendered from `snapshot` (normally the empty
    FilterState) so the page is complete before the first callback fires.
    """
    small = [v for v in views if v.id != "sleep_scatter"]
    scatter = [v for v in views if v.id == "sleep_scatter"]

    rows = [
        dbc.Row(
            [dbc.Col(_chart_card(v, snapshot, SMALL_CHART_HEIGHT, GRAPH_CONFIG), md=12 // max(len(small), 1)) for v in small],
            className="g-3",
        )
    ]
    if scatter:
        rows.append(
            dbc.Row(
                [dbc.Col(_chart_card(scatter[0], snapshot, SCATTER_HEIGHT, SCATTER_GRAPH_CONFIG), md=12)],
                className="g-3 mt-1",
            )
        )
    return html.Div(rows)
