from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from sleep_dashboard.config.model import GlobalConfig
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.ui.context import AppContext
from sleep_dashboard.ui.ids import IDs
from sleep_dashboard.ui.layout.build_chart_panel import build_chart_panel
from sleep_dashboard.ui.layout.build_detail_panel import build_detail_panel
from sleep_dashboard.ui.layout.build_navbar import build_navbar


def _filter_bar() -> html.Div:
    return html.Div(
        [
            html.Span("No filters active", id=IDs.Control.FILTER_SUMMARY, className="me-3 text-muted"),
            dbc.Button(
                "Clear filters",
                id=IDs.Control.CLEAR_FILTERS_BTN,
                color="secondary",
                size="sm",
                outline=True,
            ),
        ],
        className="d-flex align-items-center justify-content-end mt-3",
    )


def build_layout(ctx: AppContext) -> dbc.Container:
    views = [ctx.views[view_id] for view_id in ctx.registry.ids()]

    return dbc.Container(
        fluid=True,
        className="sd-root",
        children=[
            build_navbar(ctx.config, len(ctx.dataset)),

            # App-level stores
            dcc.Store(id=IDs.Store.FILTER_STATE, data=FilterState().to_dict()),
            dcc.Store(id=IDs.Store.BRUSH_STATE, data=None),

            _filter_bar(),
            dbc.Row(
                [
                    dbc.Col(build_chart_panel(views, ctx.snapshot(FilterState())), lg=8, className="mt-3"),
                    dbc.Col(build_detail_panel(ctx.dataset, ctx.config.table_page_size), lg=4, className="mt-3"),
                ],
                className="gx-3",
            ),
        ],
    )


def build_error_layout(config: GlobalConfig, title: str, details: str) -> dbc.Container:
    """Page served when the dataset cannot be loaded; no charts are drawn."""
    return dbc.Container(
        fluid=True,
        className="sd-root",
        children=[
            build_navbar(config, None),
            dbc.Alert(
                [
                    html.H4(title, className="alert-heading"),
                    html.P(details, className="mb-0", style={"whiteSpace": "pre-wrap"}),
                ],
                color="danger",
                className="mt-4",
            ),
        ],
    )
