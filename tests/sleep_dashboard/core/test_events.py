from __future__ import annotations

import pytest

from sleep_dashboard.core.events import AgeBinClicked, CategoryClicked, ClearAll, reduce
from sleep_dashboard.core.filter_state import FilterState


def test_category_click_sets_then_toggles_off():
    st0 = FilterState()

    st1 = reduce(st0, CategoryClicked(facet="gender", category="Female"))
    assert st1.gender == "Female"

    st2 = reduce(st1, CategoryClicked(facet="gender", category="Female"))
    assert st2 == st0


def test_category_click_replaces_other_value():
    st = FilterState(disorder="Insomnia")

    st = reduce(st, CategoryClicked(facet="disorder", category="Sleep Apnea"))

    assert st.disorder == "Sleep Apnea"


def test_facets_are_independent():
    st = FilterState(gender="Male", age_range=(30, 35))

    st = reduce(st, CategoryClicked(facet="disorder", category="None"))

    assert st == FilterState(gender="Male", disorder="None", age_range=(30, 35))


def test_age_bin_click_toggles_range():
    st0 = FilterState(gender="Male")

    st1 = reduce(st0, AgeBinClicked(lower=30, upper=35))
    assert st1.age_range == (30, 35)
    assert st1.gender == "Male"

    st2 = reduce(st1, AgeBinClicked(lower=40, upper=45))
    assert st2.age_range == (40, 45)

    st3 = reduce(st2, AgeBinClicked(lower=40, upper=45))
    assert st3 == st0


def test_clear_all_resets_regardless_of_state():
    full = FilterState(gender="Female", disorder="Insomnia", age_range=(30, 35))

    assert reduce(full, ClearAll()) == FilterState()
    assert reduce(FilterState(), ClearAll()) == FilterState()


def test_unknown_facet_raises():
    with pytest.raises(ValueError):
        reduce(FilterState(), CategoryClicked(facet="age_range", category="30"))
