from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from sleep_dashboard.config.model import GlobalConfig
from sleep_dashboard.ui.ids import IDs


def build_navbar(config: GlobalConfig, dataset_size: int | None) -> dbc.Navbar:
    size_text = (
        f"Total Dataset Size: {dataset_size}"
        if dataset_size is not None
        else "Dataset not loaded"
    )

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(config.ui_title, className="mb-0"),
                        html.Small(config.subtitle, className="text-muted", id="navbar-subtitle"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    size_text,
                    id=IDs.Control.DATASET_SIZE,
                    className="ms-auto fw-semibold",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm sd-navbar",
    )
