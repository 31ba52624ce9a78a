"""
Top-level package for the sleep health dashboard.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    sleep_dashboard.core
    sleep_dashboard.views
    sleep_dashboard.ui
"""

__all__: list[str] = []
