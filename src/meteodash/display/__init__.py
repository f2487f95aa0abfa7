"""Display package: view models, chart layout and render sinks."""

from meteodash.display.builder import DashboardBuilder
from meteodash.display.chart import ChartLayout, ChartRenderer, compute_layout
from meteodash.display.protocols import MockSink, RenderSink
from meteodash.display.view_models import DashboardView

__all__ = [
    "ChartLayout",
    "ChartRenderer",
    "DashboardBuilder",
    "DashboardView",
    "MockSink",
    "RenderSink",
    "compute_layout",
]
