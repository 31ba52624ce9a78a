from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class BrushSelection:
    """
    Transient rectangular selection over the scatter plot.

    Not part of FilterState: it only narrows the detail table and the displayed
    means. An empty selection (no ranges) selects nothing.
    """

    x_range: Optional[Tuple[float, float]] = None
    y_range: Optional[Tuple[float, float]] = None

    @classmethod
    def empty(cls) -> BrushSelection:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.x_range is None or self.y_range is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x_range": list(self.x_range) if self.x_range is not None else None,
            "y_range": list(self.y_range) if self.y_range is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional[BrushSelection]:
        """None in, None out: a missing store value means no brush is active."""
        if data is None:
            return None

        def bounds(raw) -> Optional[Tuple[float, float]]:
            if raw is None:
                return None
            a, b = raw
            a, b = float(a), float(b)
            return (min(a, b), max(a, b))

        return cls(x_range=bounds(data.get("x_range")), y_range=bounds(data.get("y_range")))


def apply_brush(
    records: pd.DataFrame,
    brush: Optional[BrushSelection],
    x_field: str,
    y_field: str,
) -> pd.DataFrame:
    """
    Narrow `records` to the brushed rectangle (closed on both axes).

    - brush is None  -> no brush active, records returned unchanged
    - brush is empty -> empty frame with the same columns
    """
    if brush is None:
        return records
    if brush.is_empty:
        return records.iloc[0:0]

    x0, x1 = brush.x_range
    y0, y1 = brush.y_range
    xs = records[x_field]
    ys = records[y_field]
    mask = (xs >= x0) & (xs <= x1) & (ys >= y0) & (ys <= y1)
    return records[mask]
