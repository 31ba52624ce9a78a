from __future__ import annotations

import pandas as pd

from sleep_dashboard.core.dataset import Dataset
from sleep_dashboard.core.events import AgeBinClicked, CategoryClicked, ClearAll, reduce
from sleep_dashboard.core.filter_state import FilterState


def _record(gender, age, disorder="None", duration=7.0, quality=7):
    return {
        "Gender": gender,
        "Age": age,
        "Occupation": "Nurse",
        "Sleep Duration": duration,
        "Quality of Sleep": quality,
        "Physical Activity Level": 60,
        "Stress Level": 5,
        "Daily Steps": 7000,
        "Heart Rate": 70,
        "Sleep Disorder": disorder,
    }


def _make_dataset():
    rows = [
        _record("Female", 31, "Insomnia"),
        _record("Female", 33, "None"),
        _record("Male", 32, "Insomnia"),
        _record("Female", 44, "Insomnia"),
        _record("Male", 50, "Sleep Apnea"),
        _record("Female", 34, "Insomnia"),
    ]
    return Dataset(name="TestDataset", records=pd.DataFrame(rows))


def test_subset_for_state_without_selectors_returns_everything():
    ds = _make_dataset()

    sub = ds.subset_for_state(FilterState())

    assert len(sub) == len(ds)


def test_combined_filters_are_intersection_of_single_filters():
    ds = _make_dataset()

    by_gender = set(ds.subset(gender="Female").index)
    by_disorder = set(ds.subset(disorder="Insomnia").index)
    by_age = set(ds.subset(age_range=(30, 35)).index)

    state = FilterState(gender="Female", disorder="Insomnia", age_range=(30, 35))
    combined = ds.subset_for_state(state)

    assert set(combined.index) == by_gender & by_disorder & by_age
    assert list(combined.index) == [0, 5]


def test_subset_preserves_load_order():
    ds = _make_dataset()

    sub = ds.subset(gender="Female")

    assert list(sub.index) == sorted(sub.index)
    assert list(sub["Age"]) == [31, 33, 44, 34]


def test_age_range_is_half_open():
    ds = _make_dataset()

    assert list(ds.subset(age_range=(44, 50))["Age"]) == [44]
    assert list(ds.subset(age_range=(50, 55))["Age"]) == [50]


def test_male_then_age_bin_then_clear_scenario():
    rows = [_record("Male", 30), _record("Female", 42)]
    ds = Dataset(name="Scenario", records=pd.DataFrame(rows))

    state = FilterState()
    state = reduce(state, CategoryClicked(facet="gender", category="Male"))
    state = reduce(state, AgeBinClicked(lower=30, upper=35))

    sub = ds.subset_for_state(state)
    assert len(sub) == 1
    assert sub.iloc[0]["Gender"] == "Male"
    assert sub.iloc[0]["Age"] == 30

    state = reduce(state, ClearAll())
    assert state == FilterState()
    assert len(ds.subset_for_state(state)) == 2


def test_double_toggle_restores_subset():
    ds = _make_dataset()
    before = ds.subset_for_state(FilterState())

    state = reduce(FilterState(), CategoryClicked(facet="disorder", category="Insomnia"))
    assert len(ds.subset_for_state(state)) == 4

    state = reduce(state, CategoryClicked(facet="disorder", category="Insomnia"))
    after = ds.subset_for_state(state)

    pd.testing.assert_frame_equal(before, after)


def test_subset_cache_hit_returns_equal_frame():
    ds = _make_dataset()

    first = ds.subset(gender="Male")
    second = ds.subset(gender="Male")

    assert len(ds._subset_cache) == 1
    pd.testing.assert_frame_equal(first, second)
    assert first is not second


def test_writing_to_records_does_not_reach_dataset():
    ds = _make_dataset()
    n_before = len(ds.subset(age_range=(90, 95)))

    records = ds.records
    records.loc[0, "Age"] = 92

    assert len(ds.subset(age_range=(90, 95))) == n_before
    assert ds.records.loc[0, "Age"] != 92


def test_writing_to_a_subset_does_not_reach_the_cache():
    ds = _make_dataset()

    sub = ds.subset(gender="Male")
    sub.loc[sub.index[0], "Gender"] = "Female"

    assert set(ds.subset(gender="Male")["Gender"]) == {"Male"}


def test_dataset_does_not_share_input_frame():
    frame = pd.DataFrame([_record("Male", 30)])
    ds = Dataset(name="Copy", records=frame)

    frame.loc[0, "Gender"] = "Female"

    assert ds.records.loc[0, "Gender"] == "Male"


def test_categories_first_seen_order():
    ds = _make_dataset()

    assert ds.categories("Gender") == ["Female", "Male"]
    assert ds.categories("Sleep Disorder") == ["Insomnia", "None", "Sleep Apnea"]
