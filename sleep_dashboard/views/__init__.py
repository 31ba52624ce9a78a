from .category_pie_view import CategoryPieView, GenderPieView, DisorderPieView
from .age_histogram_view import AgeHistogramView
from .sleep_scatter_view import SleepScatterView

__all__ = ["CategoryPieView", "GenderPieView", "DisorderPieView", "AgeHistogramView", "SleepScatterView"]
