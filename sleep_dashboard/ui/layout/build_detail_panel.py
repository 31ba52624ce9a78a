from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from sleep_dashboard.core.aggregation import summarise
from sleep_dashboard.core.dataset import Dataset
from sleep_dashboard.ui.helpers import means_panel, records_table
from sleep_dashboard.ui.ids import IDs


def build_detail_panel(dataset: Dataset, page_size: int) -> dbc.Card:
    records = dataset.records

    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Details"),
                        html.Small(
                            f"{len(records)} records",
                            id=IDs.Control.DETAIL_COUNT,
                            className="text-muted ms-2",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    html.Div(means_panel(summarise(records)), id=IDs.Control.MEANS_PANEL, className="mb-3"),
                    records_table(records, page_size=page_size),
                ]
            ),
        ],
        className="sd-detail-card",
    )
