from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output

from sleep_dashboard.ui.helpers import brush_from_selection
from sleep_dashboard.ui.ids import IDs, graph_id
from sleep_dashboard.views import SleepScatterView

if TYPE_CHECKING:
    from sleep_dashboard.ui.context import AppContext

logger = logging.getLogger(__name__)


def register_brush_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    if SleepScatterView.id not in ctx.registry.ids():
        return

    # ---------------------------------------------------------
    # Scatter selection -> brush store
    # ---------------------------------------------------------
    # A FilterState change redraws the scatter plot, which drops any brush; the
    # brush never writes back into FilterState.
    @app.callback(
        Output(IDs.Store.BRUSH_STATE, "data"),
        Input(graph_id(SleepScatterView.id), "selectedData"),
        Input(IDs.Store.FILTER_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_brush(selected_data: dict[str, Any] | None, _fs_data):
        if dash.ctx.triggered_id == IDs.Store.FILTER_STATE:
            return None

        brush = brush_from_selection(selected_data)
        logger.info("brush_changed", extra={"brush": brush.to_dict(), "empty": brush.is_empty})
        return brush.to_dict()
