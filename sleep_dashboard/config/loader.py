from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from sleep_dashboard.config.model import DEFAULT_DATA_PATH, GlobalConfig
from sleep_dashboard.core import schema
from sleep_dashboard.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def _resolve_data_path(raw_path: str, root: Path) -> Path:
    """
    Absolute paths are used as-is. Relative paths resolve against
    SLEEP_DASHBOARD_DATA_ROOT when set, otherwise against the parent of the
    config directory (the project root in the default layout).
    """
    path = Path(raw_path)
    if path.is_absolute():
        return path

    data_root = os.environ.get("SLEEP_DASHBOARD_DATA_ROOT")
    if data_root:
        root_path = Path(data_root)
        resolved = root_path / path

        # Fallback for redundant 'data/' prefix
        if not resolved.is_file() and path.parts and path.parts[0] == "data":
            alt_path = root_path / Path(*path.parts[1:])
            if alt_path.is_file():
                resolved = alt_path
        return resolved

    return (root.parent / path).resolve()


def _is_positive_int(value) -> bool:
    # bool is an int subclass; JSON true/false are not sizes
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate(cfg: GlobalConfig) -> None:
    if not _is_positive_int(cfg.age_bin_width):
        raise ConfigError(f"age_bin_width must be a positive integer, got {cfg.age_bin_width!r}")

    if not _is_positive_int(cfg.table_page_size):
        raise ConfigError(f"table_page_size must be a positive integer, got {cfg.table_page_size!r}")

    for key in ("scatter_x", "scatter_y"):
        value = getattr(cfg, key)
        if value not in schema.NUMERIC_COLUMNS:
            raise ConfigError(
                f"{key}='{value}' is not a numeric column; "
                f"choose one of {sorted(schema.NUMERIC_COLUMNS)}"
            )

    if cfg.scatter_color not in schema.CATEGORICAL_COLUMNS:
        raise ConfigError(
            f"scatter_color='{cfg.scatter_color}' is not a categorical column; "
            f"choose one of {schema.CATEGORICAL_COLUMNS}"
        )


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    :param root: Directory containing 'global.json'.
    :return: A validated GlobalConfig with an absolute data_path.
    :raises ConfigError: if global.json is missing, malformed or has invalid values.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise ConfigError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    data_path = _resolve_data_path(raw.get("data_path", DEFAULT_DATA_PATH), root)
    cfg = GlobalConfig.from_raw(raw, data_path=data_path)
    _validate(cfg)

    logger.info(
        "Global config loaded",
        extra={"config_root": str(root), "data_path": str(cfg.data_path)},
    )
    return cfg
