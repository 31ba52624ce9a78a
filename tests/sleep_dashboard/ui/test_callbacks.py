from __future__ import annotations

import json
from contextvars import copy_context

import pytest
from dash._callback_context import context_value
from dash._utils import AttributeDict
from dash.exceptions import PreventUpdate

from sleep_dashboard.core.brush import BrushSelection
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.ui.dash_app import create_dash_app
from sleep_dashboard.ui.ids import IDs, graph_id

HEADER = (
    "Person ID,Gender,Age,Occupation,Sleep Duration,Quality of Sleep,"
    "Physical Activity Level,Stress Level,BMI Category,Blood Pressure,"
    "Heart Rate,Daily Steps,Sleep Disorder"
)

ROWS = [
    "1,Male,30,Nurse,6.1,6,42,6,Overweight,126/83,77,4200,None",
    "2,Female,42,Doctor,7.8,8,90,3,Normal Weight,130/85,70,8000,Insomnia",
    "3,Female,33,Teacher,6.5,7,60,5,Normal,120/80,72,6000,None",
    "4,Male,51,Lawyer,5.9,5,30,8,Obese,140/90,85,3000,Sleep Apnea",
]

GENDER_CLICK = graph_id("gender_pie") + ".clickData"
AGE_CLICK = graph_id("age_histogram") + ".clickData"
CLEAR_CLICK = IDs.Control.CLEAR_FILTERS_BTN + ".n_clicks"
SELECTION = graph_id("sleep_scatter") + ".selectedData"
FILTER_CHANGE = IDs.Store.FILTER_STATE + ".data"


@pytest.fixture
def app(tmp_path):
    csv = tmp_path / "sleep.csv"
    csv.write_text("\n".join([HEADER, *ROWS]) + "\n")

    root = tmp_path / "config"
    root.mkdir()
    (root / "global.json").write_text(json.dumps({"ui_title": "Test", "data_path": str(csv)}))
    return create_dash_app(root)


def _callback(app, name):
    """The undecorated function behind a registered callback."""
    for entry in app.callback_map.values():
        func = entry["callback"]
        original = getattr(func, "__wrapped__", func)
        if original.__name__ == name:
            return original
    raise KeyError(name)


def _trigger(prop_id, func, *args):
    """Call `func` as if Dash had fired it for `prop_id`."""

    def run():
        context_value.set(AttributeDict(triggered_inputs=[{"prop_id": prop_id, "value": None}]))
        return func(*args)

    return copy_context().run(run)


def _pie_click(category):
    return {"points": [{"customdata": category, "label": category}]}


# ---------------------------------------------------------------------------
# Clicks -> FilterState
# ---------------------------------------------------------------------------
def test_click_sets_filter_and_resets_click_data(app):
    update = _callback(app, "update_filter_state")

    fs_data, *resets = _trigger(
        GENDER_CLICK, update, _pie_click("Female"), None, None, None, FilterState().to_dict()
    )

    assert FilterState.from_dict(fs_data) == FilterState(gender="Female")
    assert resets == [None, None, None]


def test_second_click_on_same_slice_toggles_off(app):
    update = _callback(app, "update_filter_state")
    selected = FilterState(gender="Female").to_dict()

    fs_data, *_ = _trigger(GENDER_CLICK, update, _pie_click("Female"), None, None, None, selected)

    assert FilterState.from_dict(fs_data) == FilterState()


def test_bar_click_sets_age_range(app):
    update = _callback(app, "update_filter_state")
    click = {"points": [{"customdata": [30, 35], "x": "30-34"}]}

    fs_data, *_ = _trigger(AGE_CLICK, update, None, None, click, None, FilterState(gender="Male").to_dict())

    assert FilterState.from_dict(fs_data) == FilterState(gender="Male", age_range=(30, 35))


def test_click_data_reset_echo_is_ignored(app):
    update = _callback(app, "update_filter_state")

    with pytest.raises(PreventUpdate):
        _trigger(GENDER_CLICK, update, None, None, None, None, FilterState(gender="Female").to_dict())


def test_clear_button_clears_every_selector(app):
    update = _callback(app, "update_filter_state")
    state = FilterState(gender="Male", disorder="None", age_range=(30, 35))

    fs_data, *_ = _trigger(CLEAR_CLICK, update, None, None, None, 1, state.to_dict())

    assert FilterState.from_dict(fs_data) == FilterState()


def test_only_one_callback_writes_filter_state(app):
    writers = [key for key in app.callback_map if FILTER_CHANGE in key]

    assert len(writers) == 1
    assert IDs.Store.BRUSH_STATE not in writers[0]


# ---------------------------------------------------------------------------
# Scatter selection -> brush
# ---------------------------------------------------------------------------
def test_box_selection_becomes_brush(app):
    update = _callback(app, "update_brush")
    selection = {"range": {"x": [7.0, 6.0], "y": [5, 8]}}

    brush_data = _trigger(SELECTION, update, selection, FilterState().to_dict())

    assert BrushSelection.from_dict(brush_data) == BrushSelection(x_range=(6.0, 7.0), y_range=(5.0, 8.0))


def test_filter_change_resets_brush(app):
    update = _callback(app, "update_brush")
    selection = {"range": {"x": [6.0, 7.0], "y": [5, 8]}}

    assert _trigger(FILTER_CHANGE, update, selection, FilterState(gender="Male").to_dict()) is None


# ---------------------------------------------------------------------------
# FilterState + brush -> detail panel
# ---------------------------------------------------------------------------
def test_details_without_brush_show_filtered_subset(app):
    update = _callback(app, "update_details")

    _, rows, count_text = update(FilterState(gender="Female").to_dict(), None)

    assert [r["Person ID"] for r in rows] == ["2", "3"]
    assert count_text == "2 records"


def test_brush_narrows_details_and_reports_source_size(app):
    update = _callback(app, "update_details")
    brush = BrushSelection(x_range=(6.0, 7.0), y_range=(0, 10))

    means, rows, count_text = update(FilterState().to_dict(), brush.to_dict())

    assert [r["Person ID"] for r in rows] == ["1", "3"]
    assert count_text == "2 records (brushed from 4)"
    assert "6.30 h" in str(means)


def test_empty_brush_empties_table_and_means(app):
    update = _callback(app, "update_details")
    state = FilterState(gender="Female")

    means, rows, count_text = update(state.to_dict(), BrushSelection.empty().to_dict())

    assert rows == []
    assert count_text == "0 records (brushed from 2)"
    assert "No data" in str(means)


def test_figures_follow_filter_state(app):
    update = _callback(app, "update_figures")

    gender_fig, disorder_fig, age_fig, scatter_fig = update(FilterState(gender="Female").to_dict())

    assert list(gender_fig.data[0].values) == [2, 2]
    assert gender_fig.data[0].marker.colors[0].endswith(", 0.3)")
    assert gender_fig.data[0].marker.colors[1].endswith(", 1.0)")
    assert all(op == 1.0 for op in age_fig.data[0].marker.opacity)
    assert sum(len(trace.x) for trace in scatter_fig.data) == 2
