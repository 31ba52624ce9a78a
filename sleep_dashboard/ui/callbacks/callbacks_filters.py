from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output, State, no_update
from dash.exceptions import PreventUpdate

from sleep_dashboard.core.events import ClearAll, reduce
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.ui.helpers import describe_filters, event_from_click
from sleep_dashboard.ui.ids import IDs, graph_id
from sleep_dashboard.views import AgeHistogramView, DisorderPieView, GenderPieView

if TYPE_CHECKING:
    from sleep_dashboard.ui.context import AppContext

logger = logging.getLogger(__name__)

CLICKABLE_VIEWS = (GenderPieView.id, DisorderPieView.id, AgeHistogramView.id)


def _load_state(fs_data: dict[str, Any] | None) -> FilterState:
    try:
        return FilterState.from_dict(fs_data)
    except (TypeError, ValueError):
        logger.exception("Invalid filter state in store, resetting: %r", fs_data)
        return FilterState()


def register_filter_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    clickable = [v for v in CLICKABLE_VIEWS if v in ctx.registry.ids()]

    # ---------------------------------------------------------
    # Clicks / clear button -> FilterState (the only writer)
    # ---------------------------------------------------------
    # clickData is reset to None after every handled click so that clicking the
    # same slice twice fires twice (toggle off).
    @app.callback(
        Output(IDs.Store.FILTER_STATE, "data"),
        *[Output(graph_id(v), "clickData") for v in clickable],
        *[Input(graph_id(v), "clickData") for v in clickable],
        Input(IDs.Control.CLEAR_FILTERS_BTN, "n_clicks"),
        State(IDs.Store.FILTER_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_filter_state(*args):
        n_views = len(clickable)
        click_payloads = args[:n_views]
        fs_data = args[-1]

        triggered_id = dash.ctx.triggered_id
        state = _load_state(fs_data)
        reset_clicks = [None] * n_views

        if triggered_id == IDs.Control.CLEAR_FILTERS_BTN:
            event = ClearAll()
        else:
            view_id = next((v for v in clickable if graph_id(v) == triggered_id), None)
            if view_id is None:
                raise PreventUpdate

            click_data = click_payloads[clickable.index(view_id)]
            if click_data is None:
                # Our own reset echoing back
                raise PreventUpdate

            try:
                event = event_from_click(view_id, click_data)
            except (TypeError, ValueError):
                logger.exception("Unparseable click payload for %s: %r", view_id, click_data)
                event = None

            if event is None:
                return (no_update, *reset_clicks)

        new_state = reduce(state, event)
        logger.info(
            "filter_state_changed",
            extra={"trigger": triggered_id, "filter_state": new_state.to_dict()},
        )
        return (new_state.to_dict(), *reset_clicks)

    # ---------------------------------------------------------
    # Filter summary text next to the clear button
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_SUMMARY, "children"),
        Input(IDs.Store.FILTER_STATE, "data"),
    )
    def update_filter_summary(fs_data: dict[str, Any] | None):
        return describe_filters(_load_state(fs_data))
