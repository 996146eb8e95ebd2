"""数据模型包"""

from slidecharts.models.chart import (
    ScatterPoint,
    ChartSeries,
    TableData,
    HeatmapCell,
    ChartOptions,
    ChartSpec,
    ChartRenderRequest
)
from slidecharts.models.render import (
    Comparison,
    DerivedMetrics,
    LegendEntry,
    Legend,
    RenderTree
)

__all__ = [
    # Chart
    "ScatterPoint",
    "ChartSeries",
    "TableData",
    "HeatmapCell",
    "ChartOptions",
    "ChartSpec",
    "ChartRenderRequest",
    # Render
    "Comparison",
    "DerivedMetrics",
    "LegendEntry",
    "Legend",
    "RenderTree",
]
