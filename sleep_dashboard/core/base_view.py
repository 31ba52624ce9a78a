from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, TYPE_CHECKING

import plotly.graph_objs as go

from .dataset import Dataset
from .filter_state import FilterState

if TYPE_CHECKING:
    from sleep_dashboard.config.model import GlobalConfig
    from .snapshot import DashboardSnapshot

logger = logging.getLogger(__name__)


class BaseView(ABC):
    """
    Abstract base class for all chart views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally (and as the dcc.Graph id suffix)
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - used to pick this view's data out of a DashboardSnapshot
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    def __init__(self, dataset: Dataset, config: Optional["GlobalConfig"] = None):
        self.dataset = dataset
        self.config = config

    @abstractmethod
    def compute_data(self, snapshot: "DashboardSnapshot") -> Any:
        """
        Compute the data given the current snapshot
        :param snapshot: the derived state for the current FilterState (subset, highlights, points)
        :return: data: whatever render_figure needs for this view
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any, state: FilterState) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by compute_data()
        :param state: the current FilterState
        :return: the Plotly figure for these parameters
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def timed_compute(self, snapshot: "DashboardSnapshot") -> Any:
        """compute_data() with its duration logged."""
        start = time.perf_counter()
        data = self.compute_data(snapshot)
        logger.info(
            "view_compute",
            extra={
                "view_id": self.id,
                "dataset": self.dataset.name,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return data

    def figure(self, snapshot: "DashboardSnapshot") -> go.Figure:
        return self.render_figure(self.timed_compute(snapshot), snapshot.state)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
