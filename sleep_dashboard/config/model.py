from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from sleep_dashboard.core import schema

DEFAULT_UI_TITLE = "Sleep Health Dashboard"
DEFAULT_SUBTITLE = "Sleep, lifestyle and health survey explorer"
DEFAULT_DATA_PATH = "data/sleep_health.csv"


@dataclass(frozen=True)
class GlobalConfig:
    """
    Parsed global.json.

    - data_path: CSV location, already resolved to an absolute path by the loader
    - age_bin_width: width of the Age histogram buckets (years)
    - scatter_x / scatter_y: numeric columns plotted on the scatter axes
    - scatter_color: categorical column used for the scatter colour
    """
    data_path: Path
    ui_title: str = DEFAULT_UI_TITLE
    subtitle: str = DEFAULT_SUBTITLE
    age_bin_width: int = 5
    scatter_x: str = schema.SLEEP_DURATION
    scatter_y: str = schema.QUALITY_OF_SLEEP
    scatter_color: str = schema.SLEEP_DISORDER
    table_page_size: int = 15

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], data_path: Path) -> GlobalConfig:
        return cls(
            data_path=data_path,
            ui_title=raw.get("ui_title", DEFAULT_UI_TITLE),
            subtitle=raw.get("subtitle", DEFAULT_SUBTITLE),
            age_bin_width=raw.get("age_bin_width", 5),
            scatter_x=raw.get("scatter_x", schema.SLEEP_DURATION),
            scatter_y=raw.get("scatter_y", schema.QUALITY_OF_SLEEP),
            scatter_color=raw.get("scatter_color", schema.SLEEP_DISORDER),
            table_page_size=raw.get("table_page_size", 15),
        )
