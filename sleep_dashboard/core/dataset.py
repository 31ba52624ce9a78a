from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

import numpy as np
import pandas as pd

from sleep_dashboard.core import schema

if TYPE_CHECKING:
    from sleep_dashboard.core.filter_state import FilterState


class Dataset:
    """
    Immutable, ordered collection of survey records used throughout the dashboard.

    Includes:
    - Copy-out access to the parsed record frame (one row per record); callers
      can never write into the frame the dataset holds
    - Cached subsetting for a FilterState (AND of active selectors)
    - First-seen category listings for the categorical facets
    """

    MAX_SUBSET_CACHE = 128

    # -------------------------------------------------------------------------
    # Constructor
    # -------------------------------------------------------------------------
    def __init__(
        self,
        name: str,
        records: pd.DataFrame,
        file_path: Optional[Path] = None,
    ) -> None:
        self.name = name
        self.file_path = file_path

        # Private copy; only copies of it (or of cached subsets) leave this object
        self._records = records.reset_index(drop=True).copy()

        # Cache of filtered frames keyed on the (gender, disorder, age_range) triple
        self._subset_cache: Dict[
            Tuple[Optional[str], Optional[str], Optional[Tuple[int, int]]],
            pd.DataFrame,
        ] = {}

    # -------------------------------------------------------------------------
    # Properties & getters
    # -------------------------------------------------------------------------
    @property
    def records(self) -> pd.DataFrame:
        """A copy of the full, unfiltered record frame in load order."""
        return self._records.copy()

    def __len__(self) -> int:
        return len(self._records)

    def categories(self, column: str) -> List[str]:
        """Distinct values of a categorical column in first-seen order."""
        return [str(v) for v in pd.unique(self._records[column])]

    # -------------------------------------------------------------------------
    # Subsetting with caching
    # -------------------------------------------------------------------------
    def subset(
        self,
        gender: Optional[str] = None,
        disorder: Optional[str] = None,
        age_range: Optional[Tuple[int, int]] = None,
    ) -> pd.DataFrame:
        """
        Return the records matching every given selector (logical AND), preserving
        load order. Selectors left as None do not constrain the result.

        The returned frame is a copy; writing to it never reaches the dataset
        or later subset() results.
        """
        key = (gender, disorder, tuple(age_range) if age_range is not None else None)
        cached = self._subset_cache.get(key)
        if cached is not None:
            return cached.copy()

        frame = self._records
        mask = np.ones(len(frame), dtype=bool)

        if gender is not None:
            mask &= (frame[schema.GENDER] == gender).to_numpy()

        if disorder is not None:
            mask &= (frame[schema.SLEEP_DISORDER] == disorder).to_numpy()

        if age_range is not None:
            lower, upper = age_range
            ages = frame[schema.AGE]
            mask &= ((ages >= lower) & (ages < upper)).to_numpy()

        sub = frame[mask].copy()
        self._subset_cache[key] = sub

        # Prevent unbounded growth
        if len(self._subset_cache) > self.MAX_SUBSET_CACHE:
            self._subset_cache.clear()

        return sub.copy()

    def subset_for_state(self, state: "FilterState") -> pd.DataFrame:
        """
        Convenience wrapper to subset this Dataset based on a FilterState.
        """
        return self.subset(
            gender=state.gender,
            disorder=state.disorder,
            age_range=state.age_range,
        )
