from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from sleep_dashboard.config.loader import load_global_config
from sleep_dashboard.config.model import GlobalConfig
from sleep_dashboard.core.dataset_loader import load_dataset
from sleep_dashboard.core.exceptions import (
    DataQualityError,
    DatasetLoadError,
    DatasetSchemaError,
)
from sleep_dashboard.core.view_registry import ViewRegistry
from sleep_dashboard.ui.context import AppContext
from sleep_dashboard.ui.layout.build_layout import build_error_layout, build_layout
from sleep_dashboard.ui.callbacks.callbacks_brush import register_brush_callbacks
from sleep_dashboard.ui.callbacks.callbacks_filters import register_filter_callbacks
from sleep_dashboard.ui.callbacks.callbacks_render import register_render_callbacks

logger = logging.getLogger(__name__)


def _build_view_registry() -> ViewRegistry:
    from sleep_dashboard.views import (
        GenderPieView,
        DisorderPieView,
        AgeHistogramView,
        SleepScatterView,
    )

    registry = ViewRegistry()
    registry.register(GenderPieView)
    registry.register(DisorderPieView)
    registry.register(AgeHistogramView)
    registry.register(SleepScatterView)
    return registry


def _new_dash(config: GlobalConfig) -> Dash:
    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = config.ui_title
    return app


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config (ConfigError propagates: without config there is nothing to report into)
    config = load_global_config(config_root)
    app = _new_dash(config)

    # 2) Load Dataset; failure is fatal to the charts but reported on the page
    try:
        dataset = load_dataset(config.data_path)
    except DataQualityError as e:
        logger.error(
            "Dataset failed numeric validation",
            extra={"path": str(config.data_path), "n_issues": len(e.issues)},
        )
        details = "\n".join(issue.describe() for issue in e.issues[:20])
        if len(e.issues) > 20:
            details += f"\n... and {len(e.issues) - 20} more"
        app.layout = build_error_layout(
            config,
            f"The dataset has {len(e.issues)} invalid numeric value(s).",
            details,
        )
        return app
    except (DatasetLoadError, DatasetSchemaError) as e:
        logger.error("Dataset could not be loaded", extra={"path": str(config.data_path), "error": str(e)})
        app.layout = build_error_layout(config, "The dataset could not be loaded.", str(e))
        return app

    # 3) Views, built once so histogram edges are fixed for the session
    registry = _build_view_registry()
    views = {view_id: registry.create(view_id, dataset, config) for view_id in registry.ids()}
    age_view = views.get("age_histogram")
    bins = list(getattr(age_view, "bins", []))

    # 4) App Context
    ctx = AppContext(
        config=config,
        dataset=dataset,
        registry=registry,
        views=views,
        bins=bins,
    )
    ctx.validate()

    app.layout = build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_brush_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"dataset": dataset.name, "n_records": len(dataset), "views": registry.ids()},
    )
    return app
