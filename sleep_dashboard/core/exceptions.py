from __future__ import annotations

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from sleep_dashboard.core.dataset_loader import ParseIssue


class DashboardError(Exception):
    """Base exception for all sleep_dashboard errors"""
    pass


class ConfigError(DashboardError):
    """Invalid or inconsistent global.json"""
    pass


class DatasetLoadError(DashboardError):
    """The CSV source is missing or cannot be read"""
    pass


class DatasetSchemaError(DashboardError):
    """
    CSV header doesn't match what the dashboard expects
    (missing required columns)
    """
    pass


class DataQualityError(DashboardError):
    """
    One or more required numeric cells could not be coerced.

    Carries every offending cell so the whole diagnostic can be reported at once.
    """

    def __init__(self, issues: List["ParseIssue"]):
        self.issues = list(issues)
        preview = "; ".join(issue.describe() for issue in self.issues[:5])
        more = f" (+{len(self.issues) - 5} more)" if len(self.issues) > 5 else ""
        super().__init__(
            f"{len(self.issues)} non-numeric value(s) in numeric columns: {preview}{more}"
        )
