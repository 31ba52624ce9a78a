from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import pandas as pd

from sleep_dashboard.core import schema
from sleep_dashboard.core.dataset import Dataset
from sleep_dashboard.core.exceptions import (
    DataQualityError,
    DatasetLoadError,
    DatasetSchemaError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseIssue:
    """One CSV field that failed numeric coercion."""
    row: int
    column: str
    raw_value: str

    def describe(self) -> str:
        return f"row {self.row}, '{self.column}' = {self.raw_value!r}"


@dataclass
class ParseResult:
    """
    Outcome of coercing a raw CSV frame into typed records.

    `records` is only populated when there are no issues; a failed parse never
    hands back a partially coerced frame.
    """
    records: Optional[pd.DataFrame] = None
    issues: List[ParseIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues and self.records is not None


def _check_required_columns(frame: pd.DataFrame, path: Path) -> None:
    missing = [col for col in schema.REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        msg = f"CSV {path} is missing required column(s): {missing}"
        logger.error(msg, extra={"path": str(path), "missing": missing})
        raise DatasetSchemaError(msg)


def parse_records(raw: pd.DataFrame) -> ParseResult:
    """
    Coerce the numeric columns of a string-typed frame.

    Every cell that is blank, non-numeric, or (for integer columns) not a whole
    number is reported as a ParseIssue; nothing is silently turned into NaN.
    Row numbers are 1-based data rows (header excluded).
    """
    frame = raw.copy()
    issues: List[ParseIssue] = []

    for col, dtype in schema.NUMERIC_COLUMNS.items():
        text = frame[col].astype(str).str.strip()
        values = pd.to_numeric(text, errors="coerce")

        bad = values.isna()
        if dtype.startswith("int"):
            bad |= values.notna() & (values % 1 != 0)

        for idx in frame.index[bad.to_numpy()]:
            issues.append(ParseIssue(row=int(idx) + 1, column=col, raw_value=str(raw.at[idx, col])))

        if not bad.any():
            frame[col] = values.astype(dtype)

    for col in schema.CATEGORICAL_COLUMNS:
        frame[col] = frame[col].astype(str).str.strip()

    if issues:
        issues.sort(key=lambda i: (i.row, i.column))
        return ParseResult(records=None, issues=issues)

    return ParseResult(records=frame, issues=[])


def load_dataset(path: Path | str, name: Optional[str] = None) -> Dataset:
    """
    Read the survey CSV at `path` and materialise an immutable Dataset.

    Fail-fast policy:
    - missing/unreadable file -> DatasetLoadError
    - missing required header -> DatasetSchemaError
    - any numeric coercion failure -> DataQualityError (carrying all issues)
    """
    path = Path(path)

    if not path.is_file():
        raise DatasetLoadError(f"CSV file not found at {path}.")

    try:
        # Read everything as text: "None" is a real Sleep Disorder category and
        # must not be turned into NaN by pandas' default NA handling.
        raw = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error("Failed to read CSV", extra={"path": str(path), "error": str(e)})
        raise DatasetLoadError(f"Could not read CSV at {path}: {e}") from e

    raw.columns = [str(c).strip() for c in raw.columns]
    _check_required_columns(raw, path)

    result = parse_records(raw)
    if not result.ok:
        logger.error(
            "Numeric coercion failed",
            extra={"path": str(path), "n_issues": len(result.issues)},
        )
        raise DataQualityError(result.issues)

    ds = Dataset(name=name or path.stem, records=result.records, file_path=path)

    logger.info(
        "Dataset loaded",
        extra={"dataset": ds.name, "path": str(path), "n_records": len(ds)},
    )
    return ds
