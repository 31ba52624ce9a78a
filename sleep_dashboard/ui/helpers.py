from __future__ import annotations

from typing import Any, Dict, List, Optional

import dash_bootstrap_components as dbc
import pandas as pd
from dash import dash_table, html

from sleep_dashboard.core.aggregation import AggregateView
from sleep_dashboard.core.brush import BrushSelection
from sleep_dashboard.core.events import AgeBinClicked, CategoryClicked, FilterEvent
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.ui.ids import IDs
from sleep_dashboard.views import AgeHistogramView, DisorderPieView, GenderPieView

NO_DATA = "No data"

# view id -> facet the view's clicks toggle
_PIE_FACETS = {
    GenderPieView.id: GenderPieView.facet,
    DisorderPieView.id: DisorderPieView.facet,
}


def _first_point(click_data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not click_data:
        return None
    points = click_data.get("points") or []
    return points[0] if points else None


def event_from_click(view_id: str, click_data: Optional[Dict[str, Any]]) -> Optional[FilterEvent]:
    """
    Translate a dcc.Graph clickData payload into a filter event.

    Returns None when the payload carries nothing usable (no points, or a view
    that does not take part in click filtering).
    """
    point = _first_point(click_data)
    if point is None:
        return None

    custom = point.get("customdata")

    if view_id in _PIE_FACETS:
        # Pie points put a scalar in customdata; some plotly versions wrap it in a list
        if isinstance(custom, (list, tuple)):
            custom = custom[0] if custom else None
        category = custom if custom is not None else point.get("label")
        if category is None:
            return None
        return CategoryClicked(facet=_PIE_FACETS[view_id], category=str(category))

    if view_id == AgeHistogramView.id:
        if not isinstance(custom, (list, tuple)) or len(custom) < 2:
            return None
        return AgeBinClicked(lower=int(custom[0]), upper=int(custom[1]))

    return None


def brush_from_selection(selected_data: Optional[Dict[str, Any]]) -> BrushSelection:
    """
    Build a BrushSelection from scatter selectedData.

    A cleared selection (None, or no box range) is the empty brush.
    """
    if not selected_data:
        return BrushSelection.empty()

    box = selected_data.get("range") or {}
    x_range = box.get("x")
    y_range = box.get("y")
    if not x_range or not y_range:
        return BrushSelection.empty()

    return BrushSelection.from_dict({"x_range": x_range[:2], "y_range": y_range[:2]})


def format_mean(value: Optional[float], unit: str = "") -> str:
    if value is None:
        return NO_DATA
    suffix = f" {unit}" if unit else ""
    return f"{value:.2f}{suffix}"


def describe_filters(state: FilterState) -> str:
    if state.is_empty:
        return "No filters active"

    parts: List[str] = []
    if state.gender is not None:
        parts.append(f"Gender = {state.gender}")
    if state.disorder is not None:
        parts.append(f"Sleep Disorder = {state.disorder}")
    if state.age_range is not None:
        lower, upper = state.age_range
        parts.append(f"Age {lower}-{upper - 1}")
    return " · ".join(parts)


def means_panel(view: AggregateView) -> html.Div:
    return html.Div(
        [
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Small("Avg Sleep Duration", className="text-muted"),
                            html.H4(format_mean(view.mean_sleep_duration, "h"), id="mean-sleep-duration"),
                        ]
                    ),
                    dbc.Col(
                        [
                            html.Small("Avg Quality of Sleep", className="text-muted"),
                            html.H4(format_mean(view.mean_quality_of_sleep), id="mean-quality-of-sleep"),
                        ]
                    ),
                ]
            ),
        ]
    )


def records_table(
    records: pd.DataFrame,
    page_size: int = 15,
    table_id: str = IDs.Control.DETAIL_TABLE,
) -> dash_table.DataTable:
    """
    Build a styled Dash DataTable listing the given records.
    """
    df = records.reset_index(drop=True)

    return dash_table.DataTable(
        id=table_id,
        data=df.to_dict("records"),
        columns=[{"name": c, "id": c} for c in df.columns],

        style_table={
            "overflowX": "auto",
        },
        style_as_list_view=True,
        style_cell={
            "fontFamily": 'system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif',
            "fontSize": "12px",
            "padding": "6px 8px",
            "border": "none",
            "textAlign": "left",
            "minWidth": "80px",
            "maxWidth": "220px",
            "whiteSpace": "nowrap",
            "textOverflow": "ellipsis",
        },
        style_header={
            "fontWeight": "600",
            "backgroundColor": "#f3f4f6",
            "borderBottom": "1px solid #e5e7eb",
        },
        style_data={
            "borderBottom": "1px solid #e5e7eb",
        },
        page_size=page_size,
        sort_action="native",
        filter_action="none",
    )
