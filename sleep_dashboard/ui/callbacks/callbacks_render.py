from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
import plotly.graph_objs as go
from dash import Input, Output

from sleep_dashboard.core.brush import BrushSelection
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.ui.helpers import means_panel
from sleep_dashboard.ui.ids import IDs, graph_id

if TYPE_CHECKING:
    from sleep_dashboard.ui.context import AppContext

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: str | None = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering this view.", details)


def register_render_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    view_ids = ctx.registry.ids()

    # ---------------------------------------------------------
    # Charts: FilterState -> every figure
    # ---------------------------------------------------------
    # One snapshot per change; pies and the histogram keep full-dataset counts
    # and take their emphasis from it, the scatter plot draws its points.
    @app.callback(
        *[Output(graph_id(v), "figure") for v in view_ids],
        Input(IDs.Store.FILTER_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_figures(fs_data: dict[str, Any] | None):
        try:
            state = FilterState.from_dict(fs_data)
        except (TypeError, ValueError):
            logger.exception("Invalid filter state in render callback: %r", fs_data)
            return tuple(_error_figure("Internal error: invalid filter state.") for _ in view_ids)

        snapshot = ctx.snapshot(state)

        figures = []
        for view_id in view_ids:
            try:
                figures.append(ctx.views[view_id].figure(snapshot))
            except Exception:
                logger.exception(
                    "Error rendering view",
                    extra={"view_id": view_id, "filter_state": fs_data},
                )
                figures.append(_error_figure(
                    "The app hit an unexpected error. "
                    "If this keeps happening, grab the logs and open an issue."
                ))
        return tuple(figures)

    # ---------------------------------------------------------
    # Detail panel: FilterState + brush -> means and table
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MEANS_PANEL, "children"),
        Output(IDs.Control.DETAIL_TABLE, "data"),
        Output(IDs.Control.DETAIL_COUNT, "children"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Store.BRUSH_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_details(fs_data: dict[str, Any] | None, brush_data: dict[str, Any] | None):
        try:
            state = FilterState.from_dict(fs_data)
        except (TypeError, ValueError):
            logger.exception("Invalid filter state in detail callback: %r", fs_data)
            state = FilterState()

        brush = BrushSelection.from_dict(brush_data)
        snapshot = ctx.snapshot(state, brush)

        n_table = len(snapshot.table)
        count_text = f"{n_table} records"
        if brush is not None:
            count_text += f" (brushed from {len(snapshot.filtered)})"

        return (
            means_panel(snapshot.means),
            snapshot.table.reset_index(drop=True).to_dict("records"),
            count_text,
        )
