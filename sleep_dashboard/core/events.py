from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from .filter_state import CATEGORY_FACETS, FilterState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryClicked:
    """A pie slice for `category` was clicked on the `facet` chart."""
    facet: str
    category: str


@dataclass(frozen=True)
class AgeBinClicked:
    """A histogram bar covering [lower, upper) was clicked."""
    lower: int
    upper: int


@dataclass(frozen=True)
class ClearAll:
    """The deselect-all affordance was used."""
    pass


FilterEvent = Union[CategoryClicked, AgeBinClicked, ClearAll]


def reduce(state: FilterState, event: FilterEvent) -> FilterState:
    """
    Pure transition function: (state, event) -> state'.

    Category and age-bin clicks are exclusive-choice toggles per facet: clicking the
    currently selected value clears it, anything else replaces it. ClearAll resets
    every selector regardless of the current state.
    """
    if isinstance(event, ClearAll):
        new_state = FilterState()

    elif isinstance(event, CategoryClicked):
        if event.facet not in CATEGORY_FACETS:
            raise ValueError(f"Unknown category facet '{event.facet}'")
        current = getattr(state, event.facet)
        value = None if current == event.category else event.category
        new_state = replace(state, **{event.facet: value})

    elif isinstance(event, AgeBinClicked):
        clicked = (int(event.lower), int(event.upper))
        value = None if state.age_range == clicked else clicked
        new_state = replace(state, age_range=value)

    else:
        raise TypeError(f"Unsupported filter event: {event!r}")

    logger.debug(
        "filter_transition",
        extra={"event": repr(event), "before": state.to_dict(), "after": new_state.to_dict()},
    )
    return new_state
