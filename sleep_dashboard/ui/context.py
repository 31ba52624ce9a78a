from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sleep_dashboard.config.model import GlobalConfig
from sleep_dashboard.core.aggregation import Bin
from sleep_dashboard.core.base_view import BaseView
from sleep_dashboard.core.brush import BrushSelection
from sleep_dashboard.core.dataset import Dataset
from sleep_dashboard.core.filter_state import FilterState
from sleep_dashboard.core.snapshot import DashboardSnapshot, derive_snapshot
from sleep_dashboard.core.view_registry import ViewRegistry


@dataclass
class AppContext:
    """
    Holds shared, read-only state for the Dash app: config, the loaded dataset,
    the view registry and the view instances built from it. This is passed into
    layout + callback registration functions instead of using module-level globals.

    Views are instantiated once per app so session-fixed data (histogram bin
    edges) is computed a single time.
    """
    config: GlobalConfig
    dataset: Dataset
    registry: ViewRegistry
    views: Dict[str, BaseView] = field(default_factory=dict)
    bins: List[Bin] = field(default_factory=list)

    def validate(self) -> None:
        """Ensure everything the callbacks rely on is attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppContext.registry must be initialized.")
        if self.dataset is None:
            raise RuntimeError("AppContext.dataset must be initialized.")
        missing = [v for v in self.registry.ids() if v not in self.views]
        if missing:
            raise RuntimeError(f"AppContext.views is missing registered view(s): {missing}")

    def snapshot(self, state: FilterState, brush: Optional[BrushSelection] = None) -> DashboardSnapshot:
        """Derive everything the figures and detail panel show for one state."""
        return derive_snapshot(
            self.dataset,
            state,
            self.bins,
            brush=brush,
            x_field=self.config.scatter_x,
            y_field=self.config.scatter_y,
            color_field=self.config.scatter_color,
        )
