from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

FACET_GENDER = "gender"
FACET_DISORDER = "disorder"
FACET_AGE_RANGE = "age_range"

CATEGORY_FACETS = (FACET_GENDER, FACET_DISORDER)


@dataclass(frozen=True)
class FilterState:
    """
    Represents the current cross-filter selection.

    Fields:

    - gender: selected Gender category, or None for no constraint
    - disorder: selected Sleep Disorder category, or None for no constraint
    - age_range: selected half-open age interval [lower, upper), or None

    Active selectors combine with AND. Instances are immutable; transitions are
    produced by sleep_dashboard.core.events.reduce.
    """

    gender: Optional[str] = None
    disorder: Optional[str] = None
    age_range: Optional[Tuple[int, int]] = None

    @property
    def is_empty(self) -> bool:
        return self.gender is None and self.disorder is None and self.age_range is None

    def selector(self, facet: str) -> Any:
        if facet not in (FACET_GENDER, FACET_DISORDER, FACET_AGE_RANGE):
            raise ValueError(f"Unknown facet '{facet}'")
        return getattr(self, facet)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # JSON (dcc.Store) has no tuples
        if self.age_range is not None:
            data["age_range"] = list(self.age_range)
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> FilterState:
        if not data:
            return cls()

        age_range = data.get("age_range")
        if age_range is not None:
            lower, upper = age_range
            age_range = (int(lower), int(upper))

        return cls(
            gender=data.get("gender"),
            disorder=data.get("disorder"),
            age_range=age_range,
        )
