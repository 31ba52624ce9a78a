from __future__ import annotations

__all__ = ["IDs", "graph_id"]


class IDs:
    class Store:
        FILTER_STATE = "filter-state"
        BRUSH_STATE = "brush-state"

    class Control:
        CLEAR_FILTERS_BTN = "clear-filters-btn"
        FILTER_SUMMARY = "filter-summary"

        # Detail panel
        MEANS_PANEL = "means-panel"
        DETAIL_TABLE = "detail-table"
        DETAIL_COUNT = "detail-count"

        # Navbar
        DATASET_SIZE = "dataset-size"


def graph_id(view_id: str) -> str:
    """dcc.Graph id for a registered view."""
    return f"graph-{view_id}"
