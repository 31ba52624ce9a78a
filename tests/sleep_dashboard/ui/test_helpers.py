from __future__ import annotations

import pandas as pd

from sleep_dashboard.core.aggregation import AggregateView
from sleep_dashboard.core.brush import BrushSelection
from sleep_dashboard.core.events import AgeBinClicked, CategoryClicked
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.ui.helpers import (
    NO_DATA,
    brush_from_selection,
    describe_filters,
    event_from_click,
    format_mean,
    means_panel,
    records_table,
)


def test_pie_click_becomes_category_event():
    click = {"points": [{"label": "Female", "customdata": "Female", "pointNumber": 1}]}

    assert event_from_click("gender_pie", click) == CategoryClicked(facet="gender", category="Female")


def test_pie_click_with_wrapped_customdata_or_label_only():
    wrapped = {"points": [{"customdata": ["Insomnia"]}]}
    label_only = {"points": [{"label": "Sleep Apnea"}]}

    assert event_from_click("disorder_pie", wrapped) == CategoryClicked(facet="disorder", category="Insomnia")
    assert event_from_click("disorder_pie", label_only) == CategoryClicked(facet="disorder", category="Sleep Apnea")


def test_bar_click_becomes_age_bin_event():
    click = {"points": [{"x": "30-34", "y": 12, "customdata": [30, 35]}]}

    assert event_from_click("age_histogram", click) == AgeBinClicked(lower=30, upper=35)


def test_unusable_clicks_are_ignored():
    assert event_from_click("gender_pie", None) is None
    assert event_from_click("gender_pie", {"points": []}) is None
    assert event_from_click("age_histogram", {"points": [{"customdata": None}]}) is None
    assert event_from_click("sleep_scatter", {"points": [{"x": 1, "y": 2}]}) is None


def test_box_selection_becomes_brush():
    selected = {"points": [], "range": {"x": [7.5, 6.0], "y": [5, 8]}}

    brush = brush_from_selection(selected)

    assert brush == BrushSelection(x_range=(6.0, 7.5), y_range=(5.0, 8.0))


def test_cleared_selection_is_empty_brush():
    assert brush_from_selection(None).is_empty
    assert brush_from_selection({"points": []}).is_empty
    assert brush_from_selection({"lassoPoints": {"x": [1, 2], "y": [3, 4]}}).is_empty


def test_format_mean_distinguishes_none_from_zero():
    assert format_mean(None, "h") == NO_DATA
    assert format_mean(0.0) == "0.00"
    assert format_mean(7.126, "h") == "7.13 h"


def test_describe_filters():
    assert describe_filters(FilterState()) == "No filters active"
    text = describe_filters(FilterState(gender="Male", age_range=(30, 35)))
    assert "Gender = Male" in text
    assert "Age 30-34" in text


def test_means_panel_shows_no_data_for_empty_subset():
    panel = means_panel(AggregateView(n_records=0, mean_sleep_duration=None, mean_quality_of_sleep=None))

    assert NO_DATA in str(panel)


def test_records_table_lists_rows():
    df = pd.DataFrame({"Gender": ["Male", "Female"], "Age": [30, 42]}, index=[5, 9])

    table = records_table(df, page_size=10)

    assert table.id == "detail-table"
    assert table.data == [{"Gender": "Male", "Age": 30}, {"Gender": "Female", "Age": 42}]
    assert [c["id"] for c in table.columns] == ["Gender", "Age"]
    assert table.page_size == 10
