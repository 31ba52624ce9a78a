"""
Core domain layer: dataset abstraction, aggregation, filter state and its
reducer, view base class, and the view registry
"""

from .dataset import Dataset
from .filter_state import FilterState
from .base_view import BaseView
from .view_registry import ViewRegistry

__all__ = ["Dataset", "FilterState", "BaseView", "ViewRegistry"]
